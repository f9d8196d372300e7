from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Protocol

from kgops.errors import ValidationError
from kgops.graph.graph_builder import BuildResult, create_entity, create_relation
from kgops.graph.graph_schema import Value, ValueKind
from kgops.graph.ops import Op
from kgops.registry import CoreId


@dataclass(frozen=True)
class UploadedMedia:
    """
    Content-addressed location of an uploaded file plus its measured size.
    """

    location: str
    width: Optional[int] = None
    height: Optional[int] = None


class MediaUploader(Protocol):
    def upload(self, url: str) -> UploadedMedia:
        ...


class MediaResult(NamedTuple):
    id: str
    ops: List[Op]
    location: str


_MEDIA_TYPES = {
    "image": CoreId.IMAGE,
    "video": CoreId.VIDEO,
    "pdf": CoreId.PDF,
}


def create_media(
    kind: str,
    uploader: MediaUploader,
    url: str,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> MediaResult:
    """
    Uploads `url` through the collaborator and builds the media entity
    from the returned location and dimensions.
    """
    try:
        type_id = _MEDIA_TYPES[kind]
    except KeyError:
        raise ValidationError("unknown media kind", kind=kind) from None
    media = uploader.upload(url)

    values = [Value.create(CoreId.MEDIA_URL, ValueKind.TEXT, media.location)]
    if media.width is not None:
        values.append(Value.create(CoreId.WIDTH, ValueKind.INTEGER, media.width))
    if media.height is not None:
        values.append(Value.create(CoreId.HEIGHT, ValueKind.INTEGER, media.height))

    built = create_entity(
        name=name,
        description=description,
        types=[type_id],
        values=values,
    )
    return MediaResult(built.id, built.ops, media.location)


def create_image(uploader: MediaUploader, url: str, **kwargs) -> MediaResult:
    return create_media("image", uploader, url, **kwargs)


def create_video(uploader: MediaUploader, url: str, **kwargs) -> MediaResult:
    return create_media("video", uploader, url, **kwargs)


def create_pdf(uploader: MediaUploader, url: str, **kwargs) -> MediaResult:
    return create_media("pdf", uploader, url, **kwargs)


def set_avatar(*, entity: str, image: str) -> BuildResult:
    return create_relation(from_entity=entity, to_entity=image, type=CoreId.AVATAR)
