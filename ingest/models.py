"""
BookmarkShelf v1 - Chromium Bookmarks Pydantic Models

Typed shape of the Chromium ``Bookmarks`` JSON file. Unknown keys are
ignored so newer browser versions still decode.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

URL_TYPE = "url"
FOLDER_TYPE = "folder"


class BookmarkNode(BaseModel):
    """A folder or url node anywhere below a root folder"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Node id, unique within the file")
    name: str = Field(..., description="Display name")
    type: str = Field(..., description="Node type (url, folder)")
    date_added: str = Field(..., description="Opaque WebKit timestamp token")
    date_modified: Optional[str] = Field(None, description="Folders only")
    url: Optional[str] = Field(None, description="Destination of a url node")
    children: list["BookmarkNode"] = Field(
        default_factory=list,
        description="Child nodes, meaningful for folders only",
    )

    @model_validator(mode="after")
    def _url_nodes_carry_url(self) -> "BookmarkNode":
        if self.type == URL_TYPE and not self.url:
            raise ValueError(f"url node {self.id!r} has no url")
        return self

    @property
    def is_url(self) -> bool:
        return self.type == URL_TYPE

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER_TYPE


class BookmarkFolder(BookmarkNode):
    """A top-level root folder (bookmark bar, other, synced)"""


class Roots(BaseModel):
    """The three independent root folders"""

    model_config = ConfigDict(extra="ignore")

    bookmark_bar: BookmarkFolder
    other: BookmarkFolder
    synced: BookmarkFolder


class BookmarkFile(BaseModel):
    """Whole decoded ``Bookmarks`` file"""

    model_config = ConfigDict(extra="ignore")

    roots: Roots
    version: int = Field(..., strict=True)
    checksum: str
