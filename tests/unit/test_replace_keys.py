import threading

from search.replace_keys import FIRST_KEY, KEY_CLOSE, KEY_OPEN, ReplaceKeyCounter, contains_key


def test_keys_start_at_first_key_and_increase():
    counter = ReplaceKeyCounter()
    assert counter.next_key() == f"{KEY_OPEN}{FIRST_KEY}{KEY_CLOSE}"
    assert counter.next_key() == f"{KEY_OPEN}{FIRST_KEY + 1}{KEY_CLOSE}"


def test_short_key_is_not_part_of_longer_key():
    counter = ReplaceKeyCounter(start=10)
    key_10 = counter.next_key()
    key_100 = ReplaceKeyCounter(start=100).next_key()
    assert key_10 not in key_100


def test_keys_are_unique_across_threads():
    counter = ReplaceKeyCounter()
    keys = []
    lock = threading.Lock()

    def worker():
        local = [counter.next_key() for _ in range(500)]
        with lock:
            keys.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(keys) == 4000
    assert len(set(keys)) == 4000


def test_contains_key():
    counter = ReplaceKeyCounter()
    assert contains_key(f"({counter.next_key()})")
    assert not contains_key("zxcv10 and (term.type=bog)")
