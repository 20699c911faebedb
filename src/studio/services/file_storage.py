"""Local-disk storage for project attachments."""

import re
from pathlib import Path
from uuid import UUID, uuid4

import aiofiles
import aiofiles.os

from src.studio.core.config import get_settings
from src.studio.core.exceptions import ValidationError
from src.studio.core.logging import get_logger
from src.studio.models.base import utc_now
from src.studio.schemas.project import ProjectFile

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_file_name(name: str) -> str:
    """Strip directories and anything outside ``[A-Za-z0-9._-]``."""
    cleaned = _UNSAFE_CHARS.sub("_", Path(name).name).strip("._")
    return cleaned or "file"


class FileStorage:
    """Writes attachments under ``<root>/<project_id>/`` and serves them from ``media_url``."""

    def __init__(self, root: Path, media_url: str, max_bytes: int):
        self.root = root
        self.media_url = media_url.rstrip("/")
        self.max_bytes = max_bytes

    def _relative_path(self, project_id: UUID, file_id: str, name: str) -> str:
        return f"{project_id}/{file_id}_{safe_file_name(name)}"

    async def save(
        self,
        project_id: UUID,
        name: str,
        content_type: str | None,
        data: bytes,
    ) -> ProjectFile:
        """Store an upload and return its metadata.

        Raises:
            ValidationError: If the upload is empty or larger than ``max_bytes``
        """
        if not data:
            raise ValidationError(f"File {name} is empty")
        if len(data) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise ValidationError(f"File {name} is too large. Maximum size is {limit_mb}MB.")

        file_id = uuid4().hex
        relative = self._relative_path(project_id, file_id, name)
        path = self.root / relative
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

        logger.info(
            "Stored attachment", project_id=str(project_id), file_id=file_id, size=len(data)
        )
        return ProjectFile(
            id=file_id,
            name=name,
            size=len(data),
            type=content_type or "application/octet-stream",
            url=f"{self.media_url}/{relative}",
            uploaded_at=utc_now(),
        )

    async def remove(self, project_id: UUID, file: ProjectFile) -> None:
        """Delete a stored attachment; files never written here are ignored."""
        path = self.root / self._relative_path(project_id, file.id, file.name)
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)


def get_file_storage() -> FileStorage:
    settings = get_settings()
    return FileStorage(Path(settings.upload_dir), settings.media_url, settings.max_upload_bytes)
