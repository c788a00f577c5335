"""
JSON persistence for the player profile.

The profile is read once at startup and rewritten in full after every
settled round through a staging file and an atomic rename, so a crash
or quit loses at most the round in progress.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os

from termjack.blackjack.stats import PlayerProfile
from termjack.common.errors import ProfileStoreError
from termjack.events import EventBus, EventEmitter, EngineEventType

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_PATH = Path("player.json")


class ProfileStore:
    """
    Reads and writes a `PlayerProfile` as a JSON document.

    Args:
        path: Location of the profile file
        emitter: Event sink for save results; the global bus if omitted
    """

    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_PROFILE_PATH,
        emitter: Optional[EventEmitter] = None,
    ):
        self.path = Path(path)
        self.emitter = emitter or EventBus.get_instance()

    def load(self) -> PlayerProfile:
        """
        Load the stored profile.

        A missing file gives a fresh profile; it is created on the first save.

        Raises:
            ProfileStoreError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            logger.info("No profile at %s, starting a new one", self.path)
            return PlayerProfile()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            profile = PlayerProfile.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise ProfileStoreError(f"Cannot read profile {self.path}: {exc}") from exc

        if not profile.is_consistent:
            logger.warning(
                "Profile %s counts %d games but %d wins, %d losses, %d ties",
                self.path,
                profile.games_played,
                profile.games_won,
                profile.games_lost,
                profile.games_tied,
            )
        logger.info(
            "Loaded profile from %s: %d chips, %d games played",
            self.path,
            profile.chips,
            profile.games_played,
        )
        return profile

    @property
    def staging_path(self) -> Path:
        """Scratch file the next document is written to before it replaces the profile."""
        return self.path.with_name(f".{self.path.name}.tmp")

    async def save(self, profile: PlayerProfile) -> bool:
        """
        Rewrite the profile file.

        The document is written to `staging_path` and then renamed over the
        profile, so an interrupted save leaves the previous file intact.
        A write failure is logged and reported as an ERROR event; the
        caller's in-memory profile is left as it is.

        Returns:
            True if the file was written
        """
        payload = json.dumps(profile.to_dict(), indent=2)
        staging = self.staging_path
        try:
            async with aiofiles.open(staging, mode="w", encoding="utf-8") as fh:
                await fh.write(payload)
                await fh.flush()
            await aiofiles.os.replace(staging, self.path)
        except OSError as exc:
            logger.error("Failed to save profile to %s: %s", self.path, exc)
            self._discard(staging)
            self.emitter.emit(
                EngineEventType.ERROR,
                {"message": "Failed to save profile", "path": str(self.path), "error": str(exc)},
            )
            return False

        logger.debug("Saved profile to %s", self.path)
        self.emitter.emit(
            EngineEventType.PROFILE_SAVED,
            {"path": str(self.path), **profile.to_dict()},
        )
        return True

    @staticmethod
    def _discard(staging: Path) -> None:
        try:
            staging.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", staging, exc)
