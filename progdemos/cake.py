"""A simulation of a concurrent cake shop with adjustable parameters."""

from __future__ import annotations

import queue
import random
import threading
import time
from dataclasses import dataclass

_DONE = object()  # marks the end of the baked cakes
_print_lock = threading.Lock()


def _work(mean: float, stddev: float) -> None:
    """Block for a normally distributed time around ``mean`` seconds."""
    delay = mean + random.gauss(0.0, 1.0) * stddev
    if delay > 0:
        time.sleep(delay)


@dataclass
class Shop:
    """A cake shop: one baker, several icers and one inscriber.

    Times are in seconds. A buffer of 0 still holds one cake between stages.
    """

    verbose: bool = False
    cakes: int = 0
    bake_time: float = 0.0
    bake_std_dev: float = 0.0
    bake_buf: int = 0
    num_icers: int = 0
    ice_time: float = 0.0
    ice_std_dev: float = 0.0
    ice_buf: int = 0
    inscribe_time: float = 0.0
    inscribe_std_dev: float = 0.0

    def _say(self, *parts: object) -> None:
        if self.verbose:
            with _print_lock:
                print(*parts)

    def _baker(self, baked: queue.Queue) -> None:
        for cake in range(self.cakes):
            self._say("baking", cake)
            _work(self.bake_time, self.bake_std_dev)
            baked.put(cake)
        baked.put(_DONE)

    def _icer(self, iced: queue.Queue, baked: queue.Queue) -> None:
        while True:
            cake = baked.get()
            if cake is _DONE:
                baked.put(_DONE)  # let the other icers see the end too
                return
            self._say("icing", cake)
            _work(self.ice_time, self.ice_std_dev)
            iced.put(cake)

    def _inscriber(self, iced: queue.Queue) -> list[int]:
        finished = []
        for _ in range(self.cakes):
            cake = iced.get()
            self._say("inscribing", cake)
            _work(self.inscribe_time, self.inscribe_std_dev)
            self._say("finished", cake)
            finished.append(cake)
        return finished

    def _run(self) -> list[int]:
        baked: queue.Queue = queue.Queue(maxsize=max(self.bake_buf, 1))
        iced: queue.Queue = queue.Queue(maxsize=max(self.ice_buf, 1))
        workers = [threading.Thread(target=self._baker, args=(baked,), daemon=True)]
        workers += [
            threading.Thread(target=self._icer, args=(iced, baked), daemon=True)
            for _ in range(self.num_icers)
        ]
        for worker in workers:
            worker.start()
        finished = self._inscriber(iced)
        for worker in workers:
            worker.join()
        return finished

    def work(self, runs: int) -> list[int]:
        """Run the simulation ``runs`` times; return the cakes in finishing order."""
        if self.cakes < 0:
            raise ValueError(f"cakes must be non-negative, got {self.cakes}")
        if self.cakes > 0 and self.num_icers < 1:
            raise ValueError("a shop that bakes cakes needs at least one icer")
        finished: list[int] = []
        for _ in range(runs):
            finished.extend(self._run())
        return finished