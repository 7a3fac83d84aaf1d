"""Channel configuration.

Both ends of a channel must agree on the wire codec. The default can be
chosen process-wide through the ``MSGR_CODEC`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from .builder import IdFactory, new_id
from .codecs import Codec, Codecs

CODEC_ENV = "MSGR_CODEC"
DEFAULT_CODEC = "json"


@dataclass
class ChannelOptions:
    codec: Union[str, Codec] = DEFAULT_CODEC
    id_factory: IdFactory = field(default=new_id)

    def __post_init__(self) -> None:
        # Fail at construction, not on the first send
        self.codec = Codecs.resolve(self.codec)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ChannelOptions":
        environ = os.environ if environ is None else environ
        overrides.setdefault("codec", environ.get(CODEC_ENV, DEFAULT_CODEC))
        return cls(**overrides)
