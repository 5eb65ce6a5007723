"""File type vocabulary with a built-in fallback."""

from __future__ import annotations

import sys

from rich.console import Console

from .interface import FileType, RemoteAssetGateway

stderr_console = Console(file=sys.stderr)

DEFAULT_FILE_TYPES: tuple[FileType, ...] = tuple(
    FileType(code=code, description=description)
    for code, description in (
        ("PDF", "Portable Document Format"),
        ("DOC", "Microsoft Word Document"),
        ("DOCX", "Microsoft Word Document (OpenXML)"),
        ("XLS", "Microsoft Excel Spreadsheet"),
        ("XLSX", "Microsoft Excel Spreadsheet (OpenXML)"),
        ("PPT", "Microsoft PowerPoint Presentation"),
        ("PPTX", "Microsoft PowerPoint Presentation (OpenXML)"),
        ("TXT", "Plain Text File"),
        ("RTF", "Rich Text Format"),
        ("HTML", "HyperText Markup Language"),
        ("XML", "Extensible Markup Language"),
        ("JPG", "JPEG Image"),
        ("PNG", "Portable Network Graphics"),
        ("GIF", "Graphics Interchange Format"),
        ("MP4", "MPEG-4 Video"),
        ("MP3", "MPEG Audio Layer 3"),
        ("ZIP", "ZIP Archive"),
    )
)


async def load_file_types(gateway: RemoteAssetGateway) -> list[FileType]:
    """Fetch the vocabulary, falling back to the built-in list on any failure."""
    try:
        file_types = await gateway.list_file_type_vocabulary()
    except Exception as e:
        stderr_console.print(f"[yellow]Could not load file types from API: {e}[/yellow]")
        return list(DEFAULT_FILE_TYPES)

    if not file_types:
        return list(DEFAULT_FILE_TYPES)
    return list(file_types)
