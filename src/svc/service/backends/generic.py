"""Generic fallback auto-start backend.

Used on hosts without a supported auto-start store. Nothing is ever
registered, so every service reports start-up as disabled.
"""

import sys

from svc.errors import AutoStartUnsupportedError
from svc.service.base import AutoStartBackend


class GenericAutoStartBackend(AutoStartBackend):
    @property
    def name(self) -> str:
        return "generic"

    @property
    def supports_autostart(self) -> bool:
        return False

    async def query(self, name: str) -> bool:
        return False

    async def add(self, name: str, path: str) -> None:
        raise AutoStartUnsupportedError(
            f"Auto-start is not supported on {sys.platform} "
            "(requires the Windows registry)",
            path=path,
        )

    async def remove(self, name: str) -> None:
        raise AutoStartUnsupportedError(
            f"Auto-start is not supported on {sys.platform} "
            "(requires the Windows registry)"
        )
