# SPDX-License-Identifier: LGPL-3-or-later

""" Deterministic test vectors, usable without nmigen installed. """

from hashlib import sha256


def hash_256(name):
    """a 256-bit int that depends only on the str `name`; tests derive
    operands from it so every run divides the same numbers"""
    digest = sha256(name.encode("utf-8")).digest()
    return int.from_bytes(digest, "little")
