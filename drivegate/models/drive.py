from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DriveFile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    web_view_link: str | None = None
    created_time: str | None = None


class UploadResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_id: str
    link: str | None = None


class ListFilesResult(BaseModel):
    files: list[DriveFile]
