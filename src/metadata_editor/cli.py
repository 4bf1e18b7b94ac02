"""CLI for metadata-editor using Typer and Rich.

Reads and edits the tags and embedded pictures of MP3 and MP4 files.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

from metadata_editor.attributes import Attribute
from metadata_editor.config import EditorConfig
from metadata_editor.console import (
    make_table,
    print_error,
    print_json,
    print_success,
    print_warning,
    set_console,
    status,
)
from metadata_editor.console import (
    print as cprint,
)
from metadata_editor.errors import MetadataEditorError
from metadata_editor.safe_logging import configure_rich_logging
from metadata_editor.session import EditSession

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    TEXT = "text"
    JSON = "json"


class ExitCode:
    """Standard exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    NO_RESULTS = 2


app = typer.Typer(
    name="medit",
    help="metadata-editor: read and edit tags and cover art of MP3 and MP4 files",
    no_args_is_help=True,
    add_completion=False,
)

pictures_app = typer.Typer(help="Embedded picture commands")

app.add_typer(pictures_app, name="pictures")


class AppState:
    """Global application state passed between commands."""

    config: EditorConfig
    output_format: OutputFormat
    verbose: int


state = AppState()


@contextmanager
def _session(file: Path, read_only: bool = False) -> Iterator[EditSession]:
    """Bind a session to ``file`` and turn editor errors into exit code 1."""
    with EditSession(state.config) as session:
        try:
            session.bind(file, read_only=read_only)
            yield session
        except MetadataEditorError as e:
            logger.debug(f"{type(e).__name__} ({e.kind}) for {file.name}")
            print_error(f"{file.name}: {e}")
            raise typer.Exit(code=ExitCode.ERROR) from e


def _commit(session: EditSession, file: Path) -> None:
    with status(f"Writing {file.name}..."):
        session.commit()


def _parse_assignment(assignment: str) -> tuple[Attribute, str]:
    name, sep, value = assignment.partition("=")
    if not sep:
        raise typer.BadParameter(f"Expected NAME=VALUE, got {assignment!r}", param_hint="--attr")
    try:
        return Attribute.parse(name), value
    except MetadataEditorError as e:
        raise typer.BadParameter(str(e), param_hint="--attr") from e


@app.callback()
def main(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file path", exists=True),
    ] = None,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", "-o", help="Output format"),
    ] = OutputFormat.TEXT,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity"),
    ] = 0,
) -> None:
    """metadata-editor: read and edit tags and cover art of MP3 and MP4 files."""
    cfg = EditorConfig.load(config_path)

    # CLI flag takes precedence over the config file
    if verbose > 0:
        log_level = logging.DEBUG if verbose >= 2 else logging.INFO
    else:
        level_str = cfg.logging.level.upper()
        log_level = getattr(logging, level_str, logging.WARNING)

    console = configure_rich_logging(
        level=log_level,
        hash_paths=cfg.logging.hash_paths,
        show_time=True,
        show_path=False,
    )
    set_console(console)

    if verbose < 3:
        logging.getLogger("PIL").setLevel(logging.WARNING)

    if config_path:
        logger.info("Loaded config from %s", config_path)
    logger.debug(
        f"Logging configured: level={logging.getLevelName(log_level)}, hash_paths={cfg.logging.hash_paths}"
    )

    state.config = cfg
    state.output_format = output
    state.verbose = verbose


# ====================================================================
# ATTRIBUTE COMMANDS
# ====================================================================


@app.command()
def show(
    file: Annotated[Path, typer.Argument(help="Audio file to read")],
) -> None:
    """Show all attributes of an audio file.

    Examples:
        medit show song.mp3
        medit -o json show song.m4a
    """
    with _session(file, read_only=True) as session:
        values = {attribute.value: session.get(attribute) for attribute in Attribute}
        kind = session.kind

    if state.output_format == OutputFormat.JSON:
        print_json({"file": str(file), "kind": kind.value, "attributes": values})
    else:
        rows = list(values.items())
        cprint(make_table(f"{file.name} ({kind})", {"Attribute": "cyan", "Value": ""}, rows))

    if all(value is None for value in values.values()):
        raise typer.Exit(code=ExitCode.NO_RESULTS)


@app.command("set")
def set_attributes(
    file: Annotated[Path, typer.Argument(help="Audio file to edit")],
    assignments: Annotated[
        list[str],
        typer.Option("--attr", "-a", help="Attribute assignment NAME=VALUE (repeatable)"),
    ],
) -> None:
    """Set one or more attributes and write them to the file.

    An empty VALUE deletes the attribute.

    Examples:
        medit set song.mp3 -a artist=Nirvana -a "title=Smells Like Teen Spirit"
        medit set song.m4a --attr track_number=7
    """
    parsed = [_parse_assignment(assignment) for assignment in assignments]

    with _session(file) as session:
        for attribute, value in parsed:
            logger.debug(f"Setting {attribute}")
            session.set(attribute, value)
        _commit(session, file)

    print_success(f"Updated {len(parsed)} attribute(s) in {file.name}")


@app.command()
def clear(
    file: Annotated[Path, typer.Argument(help="Audio file to edit")],
    attributes: Annotated[list[str], typer.Argument(help="Attributes to delete")],
) -> None:
    """Delete attributes from the file.

    Examples:
        medit clear song.mp3 comment unsynced_lyrics
    """
    try:
        parsed = [Attribute.parse(name) for name in attributes]
    except MetadataEditorError as e:
        raise typer.BadParameter(str(e), param_hint="ATTRIBUTES") from e

    with _session(file) as session:
        for attribute in parsed:
            session.set(attribute, None)
        _commit(session, file)

    print_success(f"Cleared {', '.join(parsed)} in {file.name}")


# ====================================================================
# PICTURE COMMANDS
# ====================================================================


@pictures_app.command("list")
def pictures_list(
    file: Annotated[Path, typer.Argument(help="Audio file to read")],
) -> None:
    """List embedded pictures with their type and size."""
    with _session(file, read_only=True) as session:
        pictures = [session.get_picture(i) for i in range(session.picture_count)]

    if state.output_format == OutputFormat.JSON:
        print_json(
            [
                {"index": p.index, "mime_type": p.mime_type, "size": len(p)}
                for p in pictures
            ]
        )
    elif pictures:
        rows = [(p.index, p.mime_type or "unknown", len(p)) for p in pictures]
        cprint(
            make_table(
                f"Pictures in {file.name}",
                {"Index": "cyan", "Type": "", "Bytes": "magenta"},
                rows,
            )
        )
    else:
        print_warning(f"No pictures in {file.name}")

    if not pictures:
        raise typer.Exit(code=ExitCode.NO_RESULTS)


@pictures_app.command("extract")
def pictures_extract(
    file: Annotated[Path, typer.Argument(help="Audio file to read")],
    dest_dir: Annotated[
        Path,
        typer.Argument(help="Directory to write picture_<n>.<ext> files into"),
    ],
) -> None:
    """Write every embedded picture to DEST_DIR."""
    with _session(file, read_only=True) as session:
        count = session.picture_count
        if count == 0:
            print_warning(f"No pictures in {file.name}")
            raise typer.Exit(code=ExitCode.NO_RESULTS)

        dest_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for index in range(count):
            picture = session.get_picture(index)
            target = dest_dir / f"picture_{index}.{picture.extension}"
            target.write_bytes(picture.data)
            logger.info("Wrote %s", target)
            written.append(target)

    if state.output_format == OutputFormat.JSON:
        print_json([str(path) for path in written])
    else:
        print_success(f"Extracted {len(written)} picture(s) to {dest_dir}")


@pictures_app.command("add")
def pictures_add(
    file: Annotated[Path, typer.Argument(help="Audio file to edit")],
    images: Annotated[list[Path], typer.Argument(help="JPEG or PNG images to embed")],
) -> None:
    """Append images after the existing pictures."""
    with _session(file) as session:
        for image in images:
            session.append_picture(image)
        _commit(session, file)
        total = session.picture_count

    print_success(f"Added {len(images)} picture(s) to {file.name} ({total} total)")


@pictures_app.command("remove")
def pictures_remove(
    file: Annotated[Path, typer.Argument(help="Audio file to edit")],
    index: Annotated[int, typer.Argument(help="0-based picture index")],
) -> None:
    """Remove the picture at INDEX; later pictures move down by one."""
    with _session(file) as session:
        session.remove_picture(index)
        _commit(session, file)

    print_success(f"Removed picture {index} from {file.name}")


# ====================================================================
# ENTRY POINT
# ====================================================================


def cli() -> None:
    """Entry point for the medit command."""
    app()


if __name__ == "__main__":
    cli()
