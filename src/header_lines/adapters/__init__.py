from .contracts import AdapterMeta, adapter, get_adapter_meta
from .file_io import FileByteSink, file_sink
from .memory import BufferByteSink, SinkFullError, memory_sink
from .registry import AdapterRegistry, AdapterRegistryError
from .socket_io import SocketByteSink

__all__ = [
    "AdapterMeta",
    "AdapterRegistry",
    "AdapterRegistryError",
    "BufferByteSink",
    "FileByteSink",
    "SinkFullError",
    "SocketByteSink",
    "adapter",
    "file_sink",
    "get_adapter_meta",
    "memory_sink",
]
