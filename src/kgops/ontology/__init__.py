"""
Ontology conventions layered on the generic entity/value/relation model:
schema entities, content blocks, data sources and media.
"""

from kgops.ontology.conventions import (
    create_property,
    create_type,
    create_text_block,
    create_query_block,
    create_collection_block,
    build_type_filter,
    resolve_view,
    attach_block,
)
from kgops.ontology.media import (
    UploadedMedia,
    MediaUploader,
    MediaResult,
    create_media,
    create_image,
    create_video,
    create_pdf,
    set_avatar,
)

__all__ = [
    "create_property",
    "create_type",
    "create_text_block",
    "create_query_block",
    "create_collection_block",
    "build_type_filter",
    "resolve_view",
    "attach_block",
    "UploadedMedia",
    "MediaUploader",
    "MediaResult",
    "create_media",
    "create_image",
    "create_video",
    "create_pdf",
    "set_avatar",
]
