from __future__ import annotations

import csv
import io
import json
import shutil
from dataclasses import dataclass

from autorelease.core.result import Err, Ok, Result
from autorelease.core.structured import as_str_dict, get_bool, get_str, get_text
from autorelease.platform.process import ProcessError
from autorelease.platform.process import run as run_process
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.model import ReleaseDetail, ReleaseSummary, parse_status

_VIEW_FIELDS = "body,targetCommitish,isDraft"


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def _gh_failed(error: ProcessError, *, message: str) -> ReleaseError:
    return ReleaseError(
        kind="gh_failed",
        message=message,
        hint=str(error),
        output=error.output,
    )


def parse_release_list(text: str) -> Result[list[ReleaseSummary], ReleaseError]:
    """Parse tab-separated `gh release list` output.

    Columns are (tag, status, title, date, ...). Blank lines are skipped.
    """
    reader = csv.reader(io.StringIO(text), delimiter="\t")
    out: list[ReleaseSummary] = []
    try:
        for lineno, row in enumerate(reader, start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) < 4:
                return Err(
                    ReleaseError(
                        kind="invalid_output",
                        message=f"unexpected release list row {lineno}: {len(row)} column(s)",
                        hint="\t".join(row),
                    )
                )
            out.append(
                ReleaseSummary(
                    tag=row[0].strip(),
                    status=parse_status(row[1]),
                    title=row[2],
                    date_raw=row[3].strip(),
                )
            )
    except csv.Error as e:
        return Err(ReleaseError(kind="invalid_output", message=f"invalid release list: {e}"))

    return Ok(out)


def parse_release_view(text: str, *, tag: str) -> Result[ReleaseDetail, ReleaseError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_output",
                message=f"invalid JSON from gh release view: {e}",
                hint=tag,
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="invalid_output",
                message=f"unexpected payload from gh release view: {tag}",
            )
        )

    body = get_text(data, "body")
    target = get_str(data, "targetCommitish")
    is_draft = get_bool(data, "isDraft")
    if body is None or target is None or is_draft is None:
        return Err(
            ReleaseError(
                kind="invalid_output",
                message=f"missing {_VIEW_FIELDS} in release payload: {tag}",
            )
        )

    return Ok(ReleaseDetail(body=body, target_commitish=target, is_draft=is_draft))


@dataclass(frozen=True, slots=True)
class GhReleaseStore:
    """ReleaseStore backed by the GitHub CLI.

    gh must be installed and authenticated (GH_TOKEN / GITHUB_TOKEN in CI).
    Calls are blocking and carry no timeout of their own.
    """

    repo_url: str

    def list_releases(self) -> Result[list[ReleaseSummary], ReleaseError]:
        result = run_process(["gh", "release", "-R", self.repo_url, "list"])
        if isinstance(result, Err):
            return Err(_gh_failed(result.error, message=f"failed to list releases: {self.repo_url}"))
        return parse_release_list(result.value)

    def view_release(self, tag: str) -> Result[ReleaseDetail, ReleaseError]:
        result = run_process(
            ["gh", "release", "-R", self.repo_url, "view", tag, "--json", _VIEW_FIELDS],
        )
        if isinstance(result, Err):
            return Err(_gh_failed(result.error, message=f"failed to view release: {tag}"))
        return parse_release_view(result.value, tag=tag)

    def create_release(
        self,
        tag: str,
        *,
        body: str,
        target: str,
        draft: bool,
    ) -> Result[str, ReleaseError]:
        cmd = ["gh", "release", "create", tag]
        if draft:
            cmd.append("-d")
        cmd += ["-R", self.repo_url, "-t", tag, "-n", body, "--target", target]

        result = run_process(cmd)
        if isinstance(result, Err):
            kind = "draft release" if draft else "release"
            return Err(_gh_failed(result.error, message=f"failed to create {kind}: {tag}"))
        return result

    def delete_release(self, tag: str) -> Result[str, ReleaseError]:
        result = run_process(
            ["gh", "release", "delete", tag, "-R", self.repo_url, "--yes"],
        )
        if isinstance(result, Err):
            return Err(_gh_failed(result.error, message=f"failed to delete release: {tag}"))
        return result
