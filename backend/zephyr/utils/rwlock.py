"""讀寫鎖

允許多個讀取者同時進入，寫入者則獨佔。
寫入者優先：有寫入者等待時，新的讀取者會先排隊，避免寫入者飢餓。
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """以 threading.Condition 實作的讀寫鎖"""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a reader holding the lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                self._writer = True
            finally:
                self._writers_waiting -= 1
                # 等待中被中斷時，喚醒因寫入者排隊而暫停的讀取者
                if not self._writer:
                    self._cond.notify_all()

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a writer holding the lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """讀取區段（可與其他讀取者並行）"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """寫入區段（獨佔）"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
