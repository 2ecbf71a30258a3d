import logging
import subprocess
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from codesize.core.config.settings import settings
from codesize.core.errors import SourceError
from ..domain.interfaces import ITrackedFileSource
from ..domain.models import TrackedFile

logger = logging.getLogger(__name__)

# Index modes that point at something other than a blob (submodules)
GITLINK_MODE = "160000"

class GitIndexSource(ITrackedFileSource):
    """
    Lists the files staged in a git index using the git binary.

    `git ls-files -s -z` gives mode, object id and path per entry;
    one `git cat-file --batch-check` call then resolves blob sizes.
    """

    def __init__(self, git_binary: Optional[str] = None):
        self.git_binary = git_binary or settings.GIT_BINARY

    def list_files(self, root: Path) -> Iterator[TrackedFile]:
        root = Path(root)
        entries = self._read_index(root)
        if not entries:
            return

        sizes = self._blob_sizes(root, sorted({object_id for object_id, _ in entries}))
        logger.info(f"Git index lists {len(entries)} files under {root}")
        for object_id, path in entries:
            yield TrackedFile(relative_path=path, size_hint=sizes[object_id])

    def _read_index(self, root: Path) -> List[Tuple[str, str]]:
        output = self._run(root, ["ls-files", "-s", "-z"])
        entries: List[Tuple[str, str]] = []
        seen = set()
        for record in output.split(b"\0"):
            if not record:
                continue
            try:
                meta, raw_path = record.split(b"\t", 1)
                mode, object_id, _stage = meta.decode("ascii").split(" ")
            except ValueError as e:
                raise SourceError(f"Unexpected ls-files record: {record!r}", root, "git ls-files") from e

            if mode == GITLINK_MODE:
                logger.debug(f"Skipping submodule entry: {raw_path!r}")
                continue
            path = raw_path.decode("utf-8", "surrogateescape")
            # Unmerged paths appear once per conflict stage
            if path in seen:
                continue
            seen.add(path)
            entries.append((object_id, path))
        return entries

    def _blob_sizes(self, root: Path, object_ids: List[str]) -> Dict[str, int]:
        request = "".join(f"{object_id}\n" for object_id in object_ids).encode("ascii")
        output = self._run(root, ["cat-file", "--batch-check=%(objectname) %(objectsize)"], stdin=request)

        sizes: Dict[str, int] = {}
        for line in output.decode("ascii", "replace").splitlines():
            parts = line.split(" ")
            if len(parts) != 2 or not parts[1].isdigit():
                # e.g. "<id> missing" for an object absent from the odb
                raise SourceError(f"Cannot resolve blob size: {line}", root, "git cat-file")
            sizes[parts[0]] = int(parts[1])

        missing = [object_id for object_id in object_ids if object_id not in sizes]
        if missing:
            raise SourceError(f"No size reported for {len(missing)} objects", root, "git cat-file")
        return sizes

    def _run(self, root: Path, args: List[str], stdin: Optional[bytes] = None) -> bytes:
        cmd = [self.git_binary, "-C", str(root), *args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                input=stdin,
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE
            )
        except FileNotFoundError as e:
            raise SourceError(f"git executable not found: {self.git_binary}", root, f"git {args[0]}") from e
        except subprocess.CalledProcessError as e:
            error_msg = e.stderr.decode(errors="replace").strip() if e.stderr else str(e)
            logger.error(f"git {args[0]} failed: {error_msg}")
            raise SourceError(error_msg, root, f"git {args[0]}") from e

        return result.stdout
