"""Short, human-readable identifiers for contracts and related entities.

Ids are a one-letter domain prefix followed by seven characters drawn from
``[A-Z0-9]`` with the ``secrets`` CSPRNG, e.g. ``C7X9K2M1``. The keyspace is
36**7, so collisions are possible in principle; uniqueness, where it matters,
is enforced by whatever stores the id.
"""

import re
import secrets
import string
from abc import ABC, abstractmethod

ENTITY_ID_LENGTH = 8
TRACE_ID_LENGTH = 12

CONTRACT_PREFIX = "C"
ANALYSIS_PREFIX = "A"
OCR_RESULT_PREFIX = "O"
TOXIC_CLAUSE_PREFIX = "T"
USER_PREFIX = "U"

_UPPER_ALNUM = string.ascii_uppercase + string.digits
_LOWER_ALNUM = string.ascii_lowercase + string.digits
_ENTITY_ID_PATTERN = re.compile(r"[A-Z0-9]{8}")


def _random_string(charset: str, length: int) -> str:
    return "".join(secrets.choice(charset) for _ in range(length))


def is_valid_entity_id(entity_id: str | None, prefix: str | None = None) -> bool:
    """Check length, charset and (optionally) the domain prefix of an id."""
    if entity_id is None or len(entity_id) != ENTITY_ID_LENGTH:
        return False
    if not _ENTITY_ID_PATTERN.fullmatch(entity_id):
        return False
    return prefix is None or entity_id.startswith(prefix.upper())


class BaseIdGenerator(ABC):
    """Contract for identifier sources injected into the pipeline."""

    @abstractmethod
    def new_entity_id(self, prefix: str) -> str:
        """Return ``prefix`` followed by seven random ``[A-Z0-9]`` characters."""

    @abstractmethod
    def new_trace_id(self) -> str:
        """Return a 12-character lowercase alphanumeric trace id."""

    def new_contract_id(self) -> str:
        return self.new_entity_id(CONTRACT_PREFIX)


class SecureIdGenerator(BaseIdGenerator):
    """Id generator backed by the ``secrets`` module."""

    def new_entity_id(self, prefix: str) -> str:
        if len(prefix) != 1 or prefix.upper() not in _UPPER_ALNUM:
            raise ValueError(f"Entity id prefix must be one alphanumeric character, got {prefix!r}")
        return prefix.upper() + _random_string(_UPPER_ALNUM, ENTITY_ID_LENGTH - 1)

    def new_trace_id(self) -> str:
        return _random_string(_LOWER_ALNUM, TRACE_ID_LENGTH)
