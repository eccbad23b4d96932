import json
import threading

import numpy as np
import pytest

from experiments.streamer import ResultStreamer


def test_concurrent_producers_write_every_record(tmp_path):
    path = tmp_path / "out" / "results.jsonl"
    streamer = ResultStreamer(path, maxsize=4)

    def produce(worker: int) -> None:
        for i in range(50):
            streamer.send({"worker": worker, "i": i})

    threads = [threading.Thread(target=produce, args=(w,)) for w in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    streamer.close()

    records = [json.loads(l) for l in path.read_text().splitlines()]
    assert len(records) == 200
    assert streamer.written == 200
    assert {(r["worker"], r["i"]) for r in records} == {
        (w, i) for w in range(4) for i in range(50)
    }


def test_records_are_serialised_to_plain_json(tmp_path):
    path = tmp_path / "results.jsonl"
    with ResultStreamer(path) as streamer:
        streamer.send({"policy": np.array([0.5, 0.5]), "steps": np.int64(3)})
    assert json.loads(path.read_text()) == {"policy": [0.5, 0.5], "steps": 3}


def test_send_after_close_raises(tmp_path):
    streamer = ResultStreamer(tmp_path / "r.jsonl")
    streamer.close()
    streamer.close()
    with pytest.raises(RuntimeError):
        streamer.send({"x": 1})


def test_close_releases_file_when_join_fails(tmp_path, monkeypatch):
    streamer = ResultStreamer(tmp_path / "r.jsonl")
    real_join = streamer._thread.join

    def failing_join(*args, **kwargs):
        real_join()
        raise RuntimeError("interrupted")

    monkeypatch.setattr(streamer._thread, "join", failing_join)
    with pytest.raises(RuntimeError, match="interrupted"):
        streamer.close()
    assert streamer._fh.closed
