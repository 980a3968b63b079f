"""
Contention Scenario: two holders, one resource

A holder takes the resource and keeps it for ``hold_time``; meanwhile a
contender tries to take it with a bounded wait of ``timeout``. When the hold
outlasts the timeout the contender must give up after roughly ``timeout``
instead of blocking until the holder lets go.
"""
import time
import threading
from typing import Dict

from core import Resource


class ContentionScenario:
    """
    Configuration:
    - 1 resource
    - hold_time = 0.100 s
    - timeout = 0.050 s
    """

    def __init__(self, hold_time: float = 0.100, timeout: float = 0.050):
        self.hold_time = hold_time
        self.timeout = timeout

    def run(self) -> Dict:
        resource = Resource(0)
        holding = threading.Event()
        outcome = {}

        def holder():
            resource.acquire('holder', self.timeout)
            holding.set()
            time.sleep(self.hold_time)
            resource.release('holder')

        def contender():
            holding.wait()
            t0 = time.perf_counter()
            outcome['acquired'] = resource.acquire('contender', self.timeout)
            outcome['waited'] = time.perf_counter() - t0
            if outcome['acquired']:
                resource.release('contender')

        threads = [threading.Thread(target=holder), threading.Thread(target=contender)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        outcome['released'] = not resource.locked()
        return outcome


if __name__ == '__main__':
    result = ContentionScenario().run()
    print(f"Contender acquired: {result['acquired']} after {result['waited'] * 1000:.1f} ms")
