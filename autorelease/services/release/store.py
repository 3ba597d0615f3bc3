"""Capability interface of the release store.

The workflow only needs four operations. The gh CLI adapter implements
them; a direct API client or an in-memory fake would work just as well.
"""

from __future__ import annotations

from typing import Protocol

from autorelease.core.result import Result
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.model import ReleaseDetail, ReleaseSummary


class ReleaseStore(Protocol):
    def list_releases(self) -> Result[list[ReleaseSummary], ReleaseError]:
        """Releases of the repository, latest first."""
        ...

    def view_release(self, tag: str) -> Result[ReleaseDetail, ReleaseError]: ...

    def create_release(
        self,
        tag: str,
        *,
        body: str,
        target: str,
        draft: bool,
    ) -> Result[str, ReleaseError]:
        """Create a release titled `tag`. Returns the store's output."""
        ...

    def delete_release(self, tag: str) -> Result[str, ReleaseError]: ...
