"""Owner-only permission enforcement for keytab files and their directories.

Each permission class (read, write, execute) is adjusted with its own chmod
so a failure can be reported against the exact operation that failed:

    read     revoke group/other, grant owner
    write    revoke group/other, grant owner
    execute  directory → revoke group/other, grant owner
             file      → revoke everyone
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from keytab_materializer.errors import PermissionEnforcementFailed

logger = logging.getLogger(__name__)

_GROUP_OTHER_READ = stat.S_IRGRP | stat.S_IROTH
_GROUP_OTHER_WRITE = stat.S_IWGRP | stat.S_IWOTH
_GROUP_OTHER_EXEC = stat.S_IXGRP | stat.S_IXOTH
_ALL_EXEC = stat.S_IXUSR | _GROUP_OTHER_EXEC


def _steps(is_dir: bool) -> list[tuple[str, int, int]]:
    """(operation name, bits to clear, bits to set) in application order."""
    steps = [
        ("readable only by owner", _GROUP_OTHER_READ, stat.S_IRUSR),
        ("writable only by owner", _GROUP_OTHER_WRITE, stat.S_IWUSR),
    ]
    if is_dir:
        steps.append(("executable only by owner", _GROUP_OTHER_EXEC, stat.S_IXUSR))
    else:
        steps.append(("not executable", _ALL_EXEC, 0))
    return steps


def enforce_owner_only(path: str | Path) -> None:
    """Restrict *path* so only the owning process user can use it.

    A path that does not exist is left alone. Any chmod failure is logged at
    warning level and raised as PermissionEnforcementFailed.
    """
    target = Path(path)
    if not target.exists():
        return

    for operation, clear, grant in _steps(target.is_dir()):
        try:
            mode = stat.S_IMODE(target.stat().st_mode)
            target.chmod((mode & ~clear) | grant)
        except OSError as e:
            err = PermissionEnforcementFailed(operation, str(target.absolute()))
            logger.warning("%s: %s", err, e)
            raise err from e


def ensure_directory(path: str | Path) -> bool:
    """Create *path* if needed and lock it down to the owner.

    Returns True if the directory exists afterwards. Creation errors are not
    raised; the caller decides what a missing directory means. Permission
    errors are.
    """
    directory = Path(path)
    if not directory.exists():
        try:
            os.makedirs(directory)
        except OSError as e:
            logger.debug("Could not create directory %s: %s", directory, e)
    if not directory.is_dir():
        return False
    enforce_owner_only(directory)
    return True
