from __future__ import annotations
from typing import Any, Dict, Protocol as TypingProtocol, Union

import json
import msgpack

from .errors import CodecError

Payload = Union[str, bytes]

class Codec(TypingProtocol):
    name: str
    def dumps(self, obj: Any) -> Payload: ...
    def loads(self, data: Payload) -> Any: ...

class JSONCodec:
    # Text payloads, the native postMessage format
    name = "json"
    def dumps(self, obj: Any) -> str:
        return json.dumps(obj, separators=(",", ":"))
    def loads(self, data: Payload) -> Any:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8")
        return json.loads(data)

class MsgPackCodec:
    name = "msgpack"
    def dumps(self, obj: Any) -> bytes:
        return msgpack.packb(obj, use_bin_type=True)
    def loads(self, data: Payload) -> Any:
        return msgpack.unpackb(data, raw=False)

class Codecs:
    _registry: Dict[str, Codec] = {
        "json": JSONCodec(),
        "msgpack": MsgPackCodec(),
    }

    @classmethod
    def get(cls, name: str) -> 'Codec':
        if name not in cls._registry:
            raise CodecError(f"Unknown codec: {name}")
        return cls._registry[name]

    @classmethod
    def register(cls, codec: Codec) -> None:
        cls._registry[codec.name] = codec

    @classmethod
    def resolve(cls, codec: Union[str, Codec]) -> 'Codec':
        """Accept either a registered codec name or a codec instance."""
        if isinstance(codec, str):
            return cls.get(codec.lower())
        return codec
