import threading

from notevault.utils.locks import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=2)
    errors = []

    def reader():
        with lock.read_locked():
            try:
                both_inside.wait()
            except threading.BrokenBarrierError as err:
                errors.append(err)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_excludes_readers_and_writers():
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader():
        with lock.read_locked():
            entered.set()

    lock.acquire_write()
    t = threading.Thread(target=reader)
    t.start()
    assert not entered.wait(timeout=0.2)
    lock.release_write()
    assert entered.wait(timeout=2)
    t.join(timeout=2)


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    writer_waiting = threading.Event()

    lock.acquire_read()

    def writer():
        writer_waiting.set()
        with lock.write_locked():
            order.append("writer")

    def late_reader():
        with lock.read_locked():
            order.append("reader")

    w = threading.Thread(target=writer)
    w.start()
    writer_waiting.wait(timeout=2)
    # Give the writer time to register as waiting before the late reader arrives.
    threading.Event().wait(0.1)
    r = threading.Thread(target=late_reader)
    r.start()
    threading.Event().wait(0.1)
    assert order == []

    lock.release_read()
    w.join(timeout=2)
    r.join(timeout=2)
    assert order == ["writer", "reader"]


def test_writes_are_serialized():
    lock = ReadWriteLock()
    counter = {"value": 0}

    def bump():
        for _ in range(1000):
            with lock.write_locked():
                current = counter["value"]
                counter["value"] = current + 1

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter["value"] == 8000


def test_interrupted_writer_wakes_blocked_readers():
    lock = ReadWriteLock()
    real_wait = lock._cond.wait
    writer_errors = []
    reader_entered = threading.Event()

    def interruptible_wait(timeout=None):
        if threading.current_thread().name == "writer":
            real_wait(0.3)
            raise RuntimeError("interrupted")
        return real_wait(timeout)

    lock._cond.wait = interruptible_wait
    lock.acquire_read()

    def writer():
        try:
            lock.acquire_write()
        except RuntimeError as err:
            writer_errors.append(err)

    def late_reader():
        with lock.read_locked():
            reader_entered.set()

    w = threading.Thread(target=writer, name="writer")
    w.start()
    for _ in range(100):
        if lock._writers_waiting:
            break
        threading.Event().wait(0.01)
    r = threading.Thread(target=late_reader)
    r.start()

    w.join(timeout=2)
    assert len(writer_errors) == 1
    # The first reader still holds the lock, so only the writer's exit can wake this one.
    assert reader_entered.wait(timeout=2)
    lock.release_read()
    r.join(timeout=2)
