"""
Strong-name assembly identities, e.g.
"log4net, Version=1.2.10.0, Culture=neutral, PublicKeyToken=1b44e1d426115821".
"""

import re
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from depcopy.depcopy_exceptions import AssemblyLookupError

# Version folder names in the cache, with or without the .NET 4 "v4.0_" prefix:
#   v4.0_1.2.10.0__1b44e1d426115821, 1.2.10.0_en_1b44e1d426115821
_CACHE_FOLDER_RE = re.compile(
    r"^(?:v\d+(?:\.\d+)*_)?(?P<version>\d+(?:\.\d+)*)_(?P<culture>[^_]*)_(?P<token>[0-9a-fA-F]*)$"
)

NEUTRAL_CULTURE = "neutral"


def _normalize_culture(culture: Optional[str]) -> Optional[str]:
    if culture is None:
        return None
    culture = culture.strip().lower()
    return "" if culture == NEUTRAL_CULTURE else culture


def _normalize_token(token: Optional[str]) -> Optional[str]:
    if token is None:
        return None
    token = token.strip().lower()
    return "" if token == "null" else token


def version_key(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


class AssemblyIdentity(BaseModel):
    """
    The parts of an assembly identity used to find it in the cache.

    Parts that were not given are None and match anything.
    """

    name: str = Field(..., description="Simple assembly name")
    version: Optional[str] = Field(None, description="Four part version")
    culture: Optional[str] = Field(None, description="Culture, empty when neutral")
    public_key_token: Optional[str] = Field(None, description="Lower-case hex token, empty when null")

    class Config:
        frozen = True

    @classmethod
    def parse(cls, identity: str) -> "AssemblyIdentity":
        """
        Parse an identity string.

        Raises:
            AssemblyLookupError: If the identity has no name or a part is malformed
        """
        parts = [p.strip() for p in identity.split(",")]
        name = parts[0] if parts else ""
        if not name or "=" in name:
            raise AssemblyLookupError(f"Assembly identity has no name: '{identity}'")

        values = {}
        for part in parts[1:]:
            if not part:
                continue
            key, sep, value = part.partition("=")
            if not sep:
                raise AssemblyLookupError(
                    f"Malformed assembly identity part '{part}' in '{identity}'"
                )
            values[key.strip().lower()] = value.strip()

        version = values.get("version")
        if version is not None and not re.match(r"^\d+(\.\d+)*$", version):
            raise AssemblyLookupError(f"Malformed assembly version '{version}' in '{identity}'")

        return cls(
            name=name,
            version=version,
            culture=_normalize_culture(values.get("culture")),
            public_key_token=_normalize_token(values.get("publickeytoken")),
        )

    def matches_cache_folder(self, folder_name: str) -> Optional[str]:
        """
        Check a cache version folder name against this identity.

        Returns:
            The folder's version if it matches, None otherwise
        """
        match = _CACHE_FOLDER_RE.match(folder_name)
        if not match:
            return None

        version = match.group("version")
        if self.version is not None and version_key(version) != version_key(self.version):
            return None
        if self.culture is not None and _normalize_culture(match.group("culture")) != self.culture:
            return None
        if self.public_key_token is not None and match.group("token").lower() != self.public_key_token:
            return None
        return version

    def __str__(self) -> str:
        parts = [self.name]
        if self.version is not None:
            parts.append(f"Version={self.version}")
        if self.culture is not None:
            parts.append(f"Culture={self.culture or NEUTRAL_CULTURE}")
        if self.public_key_token is not None:
            parts.append(f"PublicKeyToken={self.public_key_token or 'null'}")
        return ", ".join(parts)
