"""Entry point for the Novel Reader application."""

import argparse
import logging
import sys
from pathlib import Path

from novel_reader.config import load_config
from novel_reader.exceptions import NovelReaderError
from novel_reader.export import write_export
from novel_reader.ingestion import NovelParser
from novel_reader.reader import chapter_markup, insert_image, reading_progress
from novel_reader.storage.repository import SQLiteNovelRepository

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="novel-reader")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Import a .txt or .md manuscript")
    import_cmd.add_argument("file")

    commands.add_parser("list", help="List stored novels")

    show_cmd = commands.add_parser("show", help="Print a chapter's markup")
    show_cmd.add_argument("novel_id")
    show_cmd.add_argument("--chapter", type=int, default=None)

    export_cmd = commands.add_parser("export", help="Export a novel to its source format")
    export_cmd.add_argument("novel_id")

    delete_cmd = commands.add_parser("delete", help="Delete a stored novel")
    delete_cmd.add_argument("novel_id")

    image_cmd = commands.add_parser("insert-image", help="Append an image to a chapter")
    image_cmd.add_argument("novel_id")
    image_cmd.add_argument("chapter", type=int)
    image_cmd.add_argument("image_url")
    image_cmd.add_argument("--caption", default="")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one command against the local novel library."""
    args = build_arg_parser().parse_args(argv)
    config = load_config(args.config)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    # Ensure required directories exist
    Path(config.storage.export_dir).mkdir(parents=True, exist_ok=True)

    repository = SQLiteNovelRepository(config.storage.sqlite_path)

    try:
        if args.command == "import":
            novel = NovelParser(config.parsing).parse_file(args.file)
            repository.put(novel)
            print(f"{novel.id}\t{novel.title}\t{novel.author}\t{len(novel.chapters)} chapters")

        elif args.command == "list":
            for novel in repository.list():
                print(
                    f"{novel.id}\t{novel.title}\t{novel.author}\t"
                    f"{len(novel.chapters)} chapters\t{reading_progress(novel)}%"
                )

        elif args.command == "show":
            novel = repository.require(args.novel_id)
            index = novel.last_read_chapter if args.chapter is None else args.chapter
            print(chapter_markup(novel, index))
            repository.update_progress(novel.id, index)

        elif args.command == "export":
            novel = repository.require(args.novel_id)
            print(write_export(novel, config.storage.export_dir))

        elif args.command == "insert-image":
            novel = repository.require(args.novel_id)
            insert_image(
                novel,
                args.chapter,
                args.image_url,
                caption=args.caption,
                default_caption=config.parsing.default_image_caption,
            )
            repository.put(novel)

        elif args.command == "delete":
            if not repository.delete(args.novel_id):
                print(f"Novel not found: {args.novel_id}", file=sys.stderr)
                return 1

    except (NovelReaderError, FileNotFoundError, IndexError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
