"""
Access Gate Module

First-in-first-out admission queue of logged-in sessions. Only the session at
the head of the queue may transact.
"""

from collections import deque
from contextlib import contextmanager
from typing import Deque, Iterator, List, Optional
import threading

from .errors import NotYourTurn
from .logging_config import get_logger, log_action


class AccessGate:
    """
    Strict FIFO turn-taking between sessions

    The gate lock is reentrant and shared by every method, so an action run
    inside turn() cannot be interleaved with another session's dequeue.
    """

    def __init__(self):
        self._queue: Deque[str] = deque()
        self._lock = threading.RLock()
        self.logger = get_logger("atm_banking.access")

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def enqueue(self, customer_id: str) -> None:
        """Append a session to the tail"""
        with self._lock:
            self._queue.append(customer_id)
            position = len(self._queue)
        log_action(
            self.logger, "info", "Session queued",
            customer_id=customer_id, action="enqueue",
            extra={"position": position}
        )

    def is_front(self, customer_id: str) -> bool:
        """True iff the queue is non-empty and its head is customer_id"""
        with self._lock:
            return bool(self._queue) and self._queue[0] == customer_id

    def dequeue(self) -> Optional[str]:
        """Remove the head if present; returns it, or None when empty"""
        with self._lock:
            if not self._queue:
                return None
            customer_id = self._queue.popleft()
        log_action(
            self.logger, "info", "Session dequeued",
            customer_id=customer_id, action="dequeue"
        )
        return customer_id

    def contains(self, customer_id: str) -> bool:
        with self._lock:
            return customer_id in self._queue

    def leave(self, customer_id: str) -> bool:
        """Drop the earliest queued entry for customer_id from any position"""
        with self._lock:
            try:
                self._queue.remove(customer_id)
            except ValueError:
                return False
        log_action(
            self.logger, "info", "Session left queue",
            customer_id=customer_id, action="leave"
        )
        return True

    def release(self, customer_id: str) -> bool:
        """Dequeue customer_id if it is the head, otherwise leave() the queue"""
        with self._lock:
            if self.is_front(customer_id):
                return self.dequeue() is not None
            return self.leave(customer_id)

    def waiting(self) -> List[str]:
        """Ordered snapshot of queued sessions, head first"""
        with self._lock:
            return list(self._queue)

    @contextmanager
    def turn(self, customer_id: str) -> Iterator[None]:
        """
        Run the enclosed block as customer_id's turn

        Raises:
            NotYourTurn: If customer_id is not the head of the queue
        """
        with self._lock:
            if not self.is_front(customer_id):
                log_action(
                    self.logger, "warning", "Action refused: not head of queue",
                    customer_id=customer_id, action="turn"
                )
                raise NotYourTurn(f"Customer {customer_id} is not the active session")
            yield
