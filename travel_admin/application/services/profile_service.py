"""Profile image upload and removal for back-office users."""

import logging
import mimetypes

from travel_admin.application.interfaces.object_storage import ObjectStorage
from travel_admin.application.repositories.users import UserRepository
from travel_admin.application.schemas.result import OperationResult
from travel_admin.application.services.session_context import profile_image_key
from travel_admin.domain.messages import MessageCatalog

logger = logging.getLogger(__name__)


class ProfileService:
    """Stores profile pictures under ``profileImages/<uid>`` and links them via ``avatar``."""

    def __init__(
        self,
        users: UserRepository,
        storage: ObjectStorage,
        messages: MessageCatalog | None = None,
    ):
        self._users = users
        self._storage = storage
        self._messages = messages or MessageCatalog()

    async def upload_profile_image(
        self, document_id: str, uid: str, content: bytes, filename: str = ""
    ) -> OperationResult:
        """Upload ``content`` as the user's picture and set ``avatar`` on their document."""
        content_type = mimetypes.guess_type(filename)[0] if filename else None
        try:
            url = await self._storage.put(profile_image_key(uid), content, content_type)
        except Exception as exc:
            logger.error("Profile image upload failed for %s: %s", uid, exc)
            return OperationResult.fail(self._messages.get("image_upload_failed"))

        result = await self._users.update(document_id, {"avatar": url})
        if not result.success:
            # No document points at the object, so drop it
            try:
                await self._storage.delete(profile_image_key(uid))
            except Exception as exc:
                logger.warning("Could not remove orphaned profile image for %s: %s", uid, exc)
            return result
        logger.info("Profile image stored for %s (%d bytes)", uid, len(content))
        return OperationResult.ok(url)

    async def remove_profile_image(self, document_id: str, uid: str) -> OperationResult:
        try:
            removed = await self._storage.delete(profile_image_key(uid))
        except Exception as exc:
            logger.error("Profile image removal failed for %s: %s", uid, exc)
            return OperationResult.fail(self._messages.get("image_remove_failed"))

        if not removed:
            logger.info("No profile image stored for %s", uid)
        return await self._users.update(document_id, {"avatar": None})
