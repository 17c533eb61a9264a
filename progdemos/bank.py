"""A concurrency-safe bank with one account."""

from __future__ import annotations

import queue
import threading


class Bank:
    """A single account whose balance is guarded by a lock."""

    def __init__(self, balance: int = 0) -> None:
        self._lock = threading.Lock()
        self._balance = balance

    def deposit(self, amount: int) -> None:
        """Add ``amount`` to the balance."""
        with self._lock:
            self._balance += amount

    def balance(self) -> int:
        """Return the current balance."""
        with self._lock:
            return self._balance


class TellerBank:
    """A single account whose balance is confined to a teller thread."""

    def __init__(self, balance: int = 0) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._teller, args=(balance,), daemon=True)
        self._thread.start()

    def _teller(self, balance: int) -> None:
        while (request := self._requests.get()) is not None:
            kind, payload = request
            if kind == "deposit":
                balance += payload
            else:
                payload.put(balance)

    def _send(self, request: tuple) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("bank is closed")
            self._requests.put(request)

    def deposit(self, amount: int) -> None:
        """Add ``amount`` to the balance."""
        self._send(("deposit", amount))

    def balance(self) -> int:
        """Return the current balance."""
        reply: queue.Queue = queue.Queue(maxsize=1)
        self._send(("balance", reply))
        return reply.get()

    def close(self) -> None:
        """Stop the teller thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        self._thread.join()

    def __enter__(self) -> TellerBank:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()