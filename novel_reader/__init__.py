"""Novel Reader: chapter segmentation and rendering for plain-text and Markdown manuscripts."""
