"""
Tests for snapshots and replay recording.
"""

import json

import pytest
import numpy as np

from box_game.box_core.config_loader import load_config
from box_game.box_core.game import CoreGame
from box_game.box_core.replay_recorder import (
    ReplayRecorder,
    compute_config_hash,
    generate_replay_filename,
    load_replay,
    record_game,
    verify_replay,
)
from box_game.box_core.state_snapshot import KIND_CODES


FIB_8 = [1, 1, 2, 3, 5, 8, 13, 21]


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def recorder(config):
    return ReplayRecorder(CoreGame(config), name="fib")


class TestSnapshot:
    """Test numpy game snapshots."""

    def test_initial_snapshot(self, config):
        snap = CoreGame(config).snapshot()

        assert snap.turn == 0
        assert snap.status == "not_started"
        assert snap.scores == (0.0, 0.0)
        assert snap.next_player == "A"
        assert snap.next_box_index == 0
        assert snap.box_weights.dtype == np.float64
        assert snap.box_kinds.tolist() == [0, 0, 1, 1]
        assert snap.box_absorbed.tolist() == [0, 0, 0, 0]

    def test_snapshot_after_turns(self, config):
        game = CoreGame(config)
        for token in [1, 1, 2, 3]:
            game.step(token)
        snap = game.snapshot()

        assert snap.turn == 4
        assert snap.status == "running"
        assert snap.scores == (13.0, 25.0)
        assert snap.next_player == "A"
        np.testing.assert_allclose(snap.box_weights, [1.0, 1.1, 2.2, 3.3])
        assert snap.box_absorbed.tolist() == [1, 1, 1, 1]
        assert snap.box_scores.tolist() == [1.0, 1.0, 12.0, 24.0]

    def test_to_dict_is_json_serializable(self, config):
        game = CoreGame(config)
        game.run(FIB_8)
        data = game.snapshot().to_dict()

        decoded = json.loads(json.dumps(data))
        assert decoded["status"] == "finished"
        assert decoded["score_b"] == 366.25
        assert decoded["box_absorbed"] == [2, 2, 2, 2]

    def test_kind_codes_distinct(self):
        assert len(set(KIND_CODES.values())) == len(KIND_CODES)


class TestReplayRecorder:
    """Test recording and saving games."""

    def test_records_turns(self, recorder):
        recorder.reset()
        assert recorder.recording

        for token in FIB_8:
            recorder.step(token)
        result = recorder.finish()

        assert not recorder.recording
        data = recorder.get_replay_data()
        assert data["tokens"] == FIB_8
        assert data["total_turns"] == 8
        assert data["final_scores"] == [155.0, 366.25]
        assert data["winner"] == result.winner == "B"
        assert data["finished"] is True
        assert data["running_scores"][3] == [13.0, 25.0]
        assert data["turns"][2]["box_kind"] == "blue"

    def test_save_and_load(self, recorder, tmp_path):
        recorder.reset()
        for token in FIB_8:
            recorder.step(token)
        recorder.finish()

        path = recorder.save(tmp_path / "replays" / "fib.json")

        assert path.exists()
        assert load_replay(path) == recorder.get_replay_data()

    def test_save_refuses_overwrite(self, recorder, tmp_path):
        recorder.reset()
        recorder.step(1)
        path = recorder.save(tmp_path / "r.json")

        with pytest.raises(FileExistsError):
            recorder.save(path, overwrite=False)

    def test_save_auto_filename(self, recorder, tmp_path):
        recorder.reset()
        recorder.step(4)
        path = recorder.save(directory=tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith("fib_")
        assert path.suffix == ".json"

    def test_auto_save_on_finish(self, config, tmp_path):
        target = tmp_path / "auto.json"
        recorder = ReplayRecorder(CoreGame(config), auto_save_path=str(target))
        recorder.reset()
        recorder.step(2)
        recorder.finish()

        assert target.exists()

    def test_reset_clears_recording(self, recorder):
        recorder.reset()
        recorder.step(5)
        recorder.finish()
        recorder.reset()

        data = recorder.get_replay_data()
        assert data["tokens"] == []
        assert data["finished"] is False

    def test_generate_filename(self):
        path = generate_replay_filename("game")
        assert path.name.startswith("game_")
        assert path.name.endswith(".json")


class TestVerifyReplay:
    """Test replay re-simulation."""

    def test_record_game_verifies(self, config, tmp_path):
        data = record_game(FIB_8, save_path=str(tmp_path / "fib.json"), config=config)

        assert verify_replay(data, config)
        assert verify_replay(load_replay(tmp_path / "fib.json"), config)

    def test_tampered_scores_fail(self, config):
        data = record_game([1, 1, 2, 3], config=config)
        data["final_scores"] = [13.0, 26.0]

        assert not verify_replay(data, config)

    def test_config_hash_mismatch(self, config):
        data = record_game([1, 2], config=config)
        data["config_hash"] = "deadbeef"

        with pytest.raises(ValueError):
            verify_replay(data, config)

    def test_config_hash_stable(self, config):
        assert compute_config_hash(config) == compute_config_hash(load_config())
        assert len(compute_config_hash(config)) == 8
