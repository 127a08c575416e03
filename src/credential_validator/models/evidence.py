"""
Document evidence handed to every detector.

Evidence is built once per request from the submitted bytes (or data URI) and
is read-only afterwards. Decoding happens eagerly with Pillow so that pixel
dimensions are available to every detector; a document that cannot be decoded
is still a valid DocumentEvidence, with `decode_error` set.
"""

import base64
import binascii
import io
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import structlog
from PIL import Image, UnidentifiedImageError

from credential_validator.exceptions import EvidenceFault

logger = structlog.get_logger(__name__)

# Errors Pillow raises for truncated, corrupt or hostile images
_DECODE_ERRORS = (
    UnidentifiedImageError,
    OSError,
    ValueError,
    SyntaxError,
    Image.DecompressionBombError,
)


@dataclass(frozen=True)
class DocumentEvidence:
    """
    Decoded document plus upstream-extracted text fields.

    Attributes:
        raw: Encoded document bytes as submitted
        media_type: Declared media type (e.g., "image/png"), if any
        image_format: Container format detected by Pillow (e.g., "PNG")
        width: Pixel width (0 when undecodable)
        height: Pixel height (0 when undecodable)
        fields: Text fields extracted upstream (curp, elector_key, text,
            issue_date, expiry_date, model)
        decode_error: Why decoding failed, None when decodable
    """

    raw: bytes
    media_type: Optional[str] = None
    image_format: Optional[str] = None
    width: int = 0
    height: int = 0
    fields: Mapping[str, str] = field(default_factory=dict)
    decode_error: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def decodable(self) -> bool:
        return self.decode_error is None

    @property
    def aspect_ratio(self) -> Optional[float]:
        if self.width <= 0 or self.height <= 0:
            return None
        return self.width / self.height

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    def get_field(self, key: str) -> Optional[str]:
        """Return a stripped text field, or None when missing or blank."""
        value = self.fields.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def open_image(self) -> Image.Image:
        """
        Decode the document into a fresh Pillow image.

        Raises:
            EvidenceFault: If the document is not a decodable image
        """
        if not self.decodable:
            raise EvidenceFault(self.decode_error or "unknown decode error")
        try:
            image = Image.open(io.BytesIO(self.raw))
            image.load()
        except _DECODE_ERRORS as e:
            raise EvidenceFault(f"{type(e).__name__}: {e}") from e
        return image

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        media_type: Optional[str] = None,
        fields: Optional[Mapping[str, str]] = None,
    ) -> "DocumentEvidence":
        """
        Build evidence from encoded image bytes.

        Never raises for bad input: decoding failures are recorded in
        `decode_error` so that they surface as a failing format stage.
        """
        fields = dict(fields or {})

        if not data:
            return cls(raw=b"", media_type=media_type, fields=fields, decode_error="empty document")

        try:
            with Image.open(io.BytesIO(data)) as image:
                image_format = image.format
                width, height = image.size
                image.load()
        except _DECODE_ERRORS as e:
            logger.info(
                "Document evidence not decodable",
                error_type=type(e).__name__,
                size_bytes=len(data),
                media_type=media_type,
            )
            return cls(
                raw=data,
                media_type=media_type,
                fields=fields,
                decode_error=f"{type(e).__name__}: {e}",
            )

        return cls(
            raw=data,
            media_type=media_type,
            image_format=image_format,
            width=width,
            height=height,
            fields=fields,
        )

    @classmethod
    def from_data_uri(
        cls,
        uri: str,
        fields: Optional[Mapping[str, str]] = None,
    ) -> "DocumentEvidence":
        """
        Build evidence from a `data:<type>;base64,<payload>` URI.

        A bare base64 payload (no `data:` header) is accepted as well.
        """
        media_type: Optional[str] = None
        payload = uri.strip()

        if payload.startswith("data:"):
            header, sep, payload = payload.partition(",")
            if not sep:
                return cls(raw=b"", fields=fields or {}, decode_error="malformed data URI")
            parts = header[len("data:"):].split(";")
            media_type = parts[0] or None
            if "base64" not in parts[1:]:
                return cls(
                    raw=b"",
                    media_type=media_type,
                    fields=fields or {},
                    decode_error="data URI is not base64-encoded",
                )

        try:
            data = base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            return cls(
                raw=b"",
                media_type=media_type,
                fields=fields or {},
                decode_error=f"invalid base64 payload: {e}",
            )

        return cls.from_bytes(data, media_type=media_type, fields=fields)
