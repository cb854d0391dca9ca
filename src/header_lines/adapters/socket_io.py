from __future__ import annotations

import socket
from dataclasses import dataclass


@dataclass
class SocketByteSink:
    # Connected-socket ByteSink; sendall either delivers the whole buffer or raises OSError.
    sock: socket.socket

    def write(self, data: bytes) -> int:
        self.sock.sendall(data)
        return len(data)

    def flush(self) -> None:
        # Unbuffered: every write already went to the kernel.
        return None

    def close(self) -> None:
        self.sock.close()
