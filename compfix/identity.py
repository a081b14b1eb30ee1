"""
Resolve the invoking user's name — the owner every problem path is given.

Uses the password database for the real uid rather than getpass.getuser(),
which trusts $USER / $LOGNAME and can be spoofed or stale.
"""

from __future__ import annotations

import os
import pwd

from compfix.errors import IdentityFailure


def current_username() -> str:
    """
    Return the current user's login name.

    Raises:
        IdentityFailure: no passwd entry for the uid, or the name is empty,
                         not valid UTF-8, or not printable.
    """
    uid = os.getuid()
    try:
        name = pwd.getpwuid(uid).pw_name
    except KeyError as e:
        raise IdentityFailure(f"Couldn't get user for uid {uid}") from e

    if not name:
        raise IdentityFailure(f"User name for uid {uid} is empty")

    # Undecodable bytes come back as surrogate escapes
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise IdentityFailure(
            f"Couldn't convert user name for uid {uid} to a string"
        ) from e

    if not name.isprintable():
        raise IdentityFailure(f"User name for uid {uid} is not printable: {name!r}")

    return name
