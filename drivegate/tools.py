"""Tool descriptors and dispatch for the two Drive tools."""

from drivegate.exceptions import MissingArgumentError, UnknownToolError
from drivegate.models.drive import DriveFile, ListFilesResult, UploadResult
from drivegate.models.mcp import ToolDescriptor
from drivegate.services.drive import DriveService

GDRIVE_UPLOAD = ToolDescriptor(
    name="gdrive_upload",
    description="Upload a markdown file to Google Drive",
    inputSchema={
        "type": "object",
        "properties": {
            "filename": {"type": "string", "description": "Filename (e.g., prompt.md)"},
            "content": {"type": "string", "description": "File content"},
            "folderId": {"type": "string", "description": "Optional folder ID"},
        },
        "required": ["filename", "content"],
    },
)

GDRIVE_LIST = ToolDescriptor(
    name="gdrive_list",
    description="List files in Google Drive",
    inputSchema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"},
            "folderId": {"type": "string", "description": "Folder ID"},
        },
    },
)

TOOLS: tuple[ToolDescriptor, ...] = (GDRIVE_UPLOAD, GDRIVE_LIST)


def list_tools() -> list[dict]:
    return [t.model_dump(by_alias=True) for t in TOOLS]


def _require(args: dict, *names: str) -> None:
    # presence only; wrong types fail later in the adapter or the Drive API
    for name in names:
        if not args.get(name):
            raise MissingArgumentError(f"Missing required argument: {name}")


def _upload(drive: DriveService, args: dict) -> DriveFile:
    _require(args, "filename", "content")
    return drive.upload_file(args["filename"], args["content"], args.get("folderId"))


def _upload_result(f: DriveFile) -> dict:
    return UploadResult(file_id=f.id, link=f.web_view_link).model_dump(by_alias=True)


def _list(drive: DriveService, args: dict) -> list[DriveFile]:
    return drive.list_files(query=args.get("query"), folder_id=args.get("folderId"))


def _list_result(files: list[DriveFile]) -> dict:
    return ListFilesResult(files=files).model_dump(by_alias=True, exclude_none=True)


# name -> (operation, tools/call result shape)
_HANDLERS = {
    GDRIVE_UPLOAD.name: (_upload, _upload_result),
    GDRIVE_LIST.name: (_list, _list_result),
}


def _lookup(tool_name: str):
    try:
        return _HANDLERS[tool_name]
    except KeyError:
        raise UnknownToolError(f"Unknown tool: {tool_name}") from None


def call(drive: DriveService, tool_name: str, args: dict | None) -> DriveFile | list[DriveFile]:
    """Run a tool and return the adapter's own objects."""
    operation, _ = _lookup(tool_name)
    return operation(drive, args or {})


def execute(drive: DriveService, tool_name: str, args: dict | None) -> dict:
    """Run a tool and shape its result for a ``tools/call`` response.

    gdrive_upload returns ``{fileId, link}``; gdrive_list returns ``{files: [...]}``.
    """
    operation, shape = _lookup(tool_name)
    return shape(operation(drive, args or {}))
