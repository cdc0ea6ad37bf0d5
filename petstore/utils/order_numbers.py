# Order number generators, selected by the ORDER_NUMBER_GENERATOR setting
import itertools
import logging
import secrets
import threading
import time
import uuid

logger = logging.getLogger(__name__)


class UUIDOrderNumberGenerator:
    def generate(self):
        return 'ORD-' + uuid.uuid4().hex[:10].upper()


class SequentialOrderNumberGenerator:
    """Epoch seconds plus a process-wide counter that wraps after 99999."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def generate(self):
        with self._lock:
            sequence = next(self._counter) % 100000
        return f'ORD-{int(time.time())}-{sequence:05d}'


class TimeBasedOrderNumberGenerator:
    def __init__(self, clock=time.time):
        self.clock = clock

    def generate(self):
        millis = str(int(self.clock() * 1000))
        last6 = millis[-6:].rjust(6, '0')
        return f'ORD-{last6}{secrets.randbelow(10000):04d}'


GENERATORS = {
    'uuid': UUIDOrderNumberGenerator,
    'sequential': SequentialOrderNumberGenerator,
    'timebased': TimeBasedOrderNumberGenerator,
}


def get_order_number_generator(name):
    generator_class = GENERATORS.get((name or '').lower())
    if generator_class is None:
        logger.warning(f"Unknown order number generator '{name}', falling back to uuid")
        generator_class = UUIDOrderNumberGenerator
    return generator_class()
