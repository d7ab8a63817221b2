"""Settings for building share links."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from chesslink.codec.links import DEFAULT_PARAM

ENV_BASE_URL = "CHESSLINK_BASE_URL"
ENV_QUERY_PARAM = "CHESSLINK_QUERY_PARAM"


@dataclass(slots=True, frozen=True)
class LinkSettings:
    """Where share links point and which query parameter holds the token."""

    base_url: str = "http://localhost:4321/"
    query_param: str = DEFAULT_PARAM

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LinkSettings:
        """Defaults overridden by ``CHESSLINK_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_url=env.get(ENV_BASE_URL) or defaults.base_url,
            query_param=env.get(ENV_QUERY_PARAM) or defaults.query_param,
        )
