"""
Tests for persistence, CSV interchange, remote backup and analytics.
Run: pytest tests/ -v
"""
import json

import pandas as pd
import pytest
import requests


def _make_profile(**overrides):
    from liftai.models import AthleteProfile
    fields = dict(
        maxes={"snatch": 80, "cj": 100, "fs": 130, "bs": 150},
        program_type="general", main_days=[2, 4, 6], accessory_days=[7],
        block_length=8, transition_weeks=0,
    )
    fields.update(overrides)
    return AthleteProfile(**fields)


def _make_block(seed=4242, **overrides):
    from liftai.block import generate_block
    return generate_block(_make_profile(**overrides), seed=seed)


class _FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = json.dumps(payload).encode() if payload is not None else b""

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)


# ═══════════════════════════════════════════════════════════════════════
# PROFILE LOADING
# ═══════════════════════════════════════════════════════════════════════

class TestProfileFromDict:

    def test_missing_fields_filled_from_defaults(self):
        from liftai.models import AthleteProfile
        p = AthleteProfile.from_dict({"name": "Ana", "maxes": {"snatch": 70}})
        assert p.name == "Ana"
        assert p.maxes["snatch"] == 70
        assert p.maxes["bs"] == 150
        assert p.main_days == [2, 4, 6]
        assert p.volume_pref == "reduced"

    def test_garbage_values_tolerated(self):
        from liftai.models import AthleteProfile
        p = AthleteProfile.from_dict({
            "blockLength": 99, "duration": "abc", "units": "stone",
            "mainDays": "monday", "injuries": "knee",
        })
        assert p.block_length == 12
        assert p.duration == 75
        assert p.units == "kg"
        assert p.main_days == [2, 4, 6]
        assert p.injuries == []

    def test_unknown_enums_reset(self):
        from liftai.models import AthleteProfile
        p = AthleteProfile.from_dict({"programType": "crossfit", "limiter": 7})
        assert p.program_type == "general"
        assert p.limiter == "balanced"
        kept = AthleteProfile.from_dict({"programType": "technique", "limiter": "timing"})
        assert kept.program_type == "technique"
        assert kept.limiter == "timing"

    def test_unknown_athlete_mode_reset_before_generation(self):
        from liftai.block import generate_block
        from liftai.models import AthleteProfile
        p = AthleteProfile.from_dict({"athleteMode": "\ud800"})
        assert p.athlete_mode == "recreational"
        assert AthleteProfile.from_dict({"athleteMode": "competition"}).athlete_mode == "competition"
        assert generate_block(p, seed=9).weeks

    def test_round_trip_keeps_bias(self):
        from liftai.models import AthleteProfile
        p = _make_profile()
        p.lift_adjustments["cj"] = -0.03
        loaded = AthleteProfile.from_dict(p.to_dict())
        assert loaded.lift_bias("cj") == -0.03
        assert loaded.to_dict() == p.to_dict()

    def test_safe_float_guards(self):
        from liftai.models import safe_float
        assert safe_float(None) == 0
        assert safe_float("nan") == 0
        assert safe_float(float("inf")) == 0
        assert safe_float("12.5") == 12.5
        assert safe_float("x", default=None) is None


# ═══════════════════════════════════════════════════════════════════════
# APP STATE
# ═══════════════════════════════════════════════════════════════════════

class TestLoadState:

    def test_missing_file_gives_default(self, tmp_path):
        from liftai.storage import load_state
        state = load_state(str(tmp_path / "nope.json"))
        assert list(state.profiles) == ["Default"]
        assert state.current_block is None

    def test_corrupt_json_gives_default(self, tmp_path):
        from liftai.storage import load_state
        path = tmp_path / "state.json"
        path.write_text("{not json")
        assert load_state(str(path)).active_profile == "Default"

    def test_wrong_type_gives_default(self, tmp_path):
        from liftai.storage import load_state
        path = tmp_path / "state.json"
        path.write_text("[1, 2, 3]")
        assert list(load_state(str(path)).profiles) == ["Default"]

    def test_no_profiles_gives_default(self, tmp_path):
        from liftai.storage import load_state
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"profiles": {}, "activeProfile": "X"}))
        assert load_state(str(path)).active_profile == "Default"

    def test_invalid_active_profile_repaired(self, tmp_path):
        from liftai.storage import load_state
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"profiles": {"Ana": {"units": "lb"}}, "activeProfile": "Ghost"}))
        state = load_state(str(path))
        assert state.active_profile == "Ana"
        assert state.profile.units == "lb"

    def test_save_and_reload(self, tmp_path):
        from liftai.storage import AppState, load_state, save_state
        state = AppState()
        block = state.generate_for_active(seed=5)
        state.day_log(0, 0).log_set(0, 0, block.weeks[0].days[0].work[0].name, weight=40)
        path = str(tmp_path / "nested" / "state.json")
        save_state(state, path)

        loaded = load_state(path)
        assert loaded.user_id == state.user_id
        assert loaded.current_block.to_dict() == block.to_dict()
        assert loaded.day_log(0, 0).get(0, 0).weight == 40
        assert loaded.block_history[0]["id"] == "Default_5"


class TestAppState:

    def test_generate_records_history(self):
        from liftai.models import round_half_up
        from liftai.storage import AppState
        state = AppState()
        block = state.generate_for_active(seed=77, block_length=4)
        entry = state.block_history[0]
        assert entry["id"] == "Default_77"
        assert entry["blockLength"] == 4
        assert entry["maxes"]["snatch"] == 80
        first = entry["weeks"][0]["days"][0]["exercises"][0]
        assert first["prescribedWeight"] > 0
        assert first["prescribedPct"] == round_half_up(block.weeks[0].days[0].work[0].pct * 100)

    def test_validation_failure_leaves_state(self):
        from liftai.block import ValidationError
        from liftai.storage import AppState
        state = AppState()
        state.profile.maxes["fs"] = 0
        with pytest.raises(ValidationError):
            state.generate_for_active(seed=1)
        assert state.current_block is None
        assert state.block_history == []

    def test_complete_day_bookkeeping(self):
        from liftai.loads import build_set_scheme
        from liftai.storage import AppState
        state = AppState()
        block = state.generate_for_active(seed=9)
        ex = block.weeks[0].days[0].work[0]
        last = len(build_set_scheme(ex, ex.lift_key, state.profile)) - 1
        state.day_log(0, 0).log_set(0, last, ex.name, action="make", weight=50, status="done")

        state.complete_day(0, 0, on="2026-05-01")
        assert state.is_day_completed(0, 0)
        assert not state.is_day_completed(0, 1)
        assert state.count_completed_for_week(0) == 1
        assert state.history[0]["title"] == "Snatch Focus"
        assert state.history[0]["session"]["work"][0]["weightText"]
        hist_day = state.block_history[0]["weeks"][0]["days"][0]
        assert hist_day["completed"] is True
        assert hist_day["completedDate"] == "2026-05-01"
        assert hist_day["exercises"][0]["actualSets"][last]["action"] == "make"

    def test_complete_without_block_raises(self):
        from liftai.storage import AppState
        with pytest.raises(LookupError):
            AppState().complete_day(0, 0)

    def test_load_and_delete_history(self):
        from liftai.storage import AppState
        state = AppState()
        state.generate_for_active(seed=1)
        state.generate_for_active(seed=2)
        loaded = state.load_block_from_history("Default_1")
        assert loaded.seed == 1
        assert state.delete_block_from_history("Default_1")
        assert not state.delete_block_from_history("Default_1")
        with pytest.raises(KeyError):
            state.load_block_from_history("Default_1")

    def test_profiles(self):
        from liftai.storage import AppState
        state = AppState()
        state.create_profile("Ana", units="lb")
        with pytest.raises(ValueError):
            state.create_profile("Ana")
        state.switch_profile("Ana")
        assert state.profile.units == "lb"
        state.day_log(0, 0).log_set(0, 0, "Snatch", weight=50)
        state.delete_profile("Ana")
        assert state.active_profile == "Default"
        assert state.set_logs.peek("Ana", 0, 0) is None
        with pytest.raises(ValueError):
            state.delete_profile("Default")

    def test_delete_profile_keeps_completions_of_similar_names(self):
        from liftai.storage import AppState
        state = AppState()
        state.create_profile("A")
        state.create_profile("A|B")
        state.completed_days = {"A|w0|d0": True, "A|B|w0|d0": True, "A|B|w1|d2": True}
        state.delete_profile("A")
        assert state.completed_days == {"A|B|w0|d0": True, "A|B|w1|d2": True}

    def test_logs_keyed_per_profile(self):
        from liftai.storage import AppState
        state = AppState()
        state.create_profile("Ana")
        state.day_log(0, 0).log_set(0, 0, "Snatch", weight=60)
        state.switch_profile("Ana")
        assert state.day_log(0, 0).get(0, 0) is None


# ═══════════════════════════════════════════════════════════════════════
# CSV INTERCHANGE
# ═══════════════════════════════════════════════════════════════════════

class TestCsv:

    def test_export_columns_and_rows(self):
        from liftai.export import CSV_COLUMNS, export_block_csv
        block = _make_block(block_length=4)
        text = export_block_csv(block)
        assert text.splitlines()[0] == ",".join(CSV_COLUMNS)
        n_rows = sum(len(d.work) for w in block.weeks for d in w.days)
        assert len(text.strip().splitlines()) == n_rows + 1

    def test_export_writes_file(self, tmp_path):
        from liftai.export import export_block_csv
        path = tmp_path / "block.csv"
        text = export_block_csv(_make_block(block_length=4), str(path))
        assert path.read_text(encoding="utf-8") == text

    def test_import_rebuilds_structure(self):
        from liftai.export import export_block_csv, import_block_csv
        from liftai.models import round_half_up
        block = _make_block(block_length=4)
        imported = import_block_csv(export_block_csv(block))
        assert len(imported.weeks) == 4
        assert [len(w.days) for w in imported.weeks] == [len(w.days) for w in block.weeks]
        assert imported.weeks[2].phase == "intensification"
        orig = block.weeks[0].days[0].work[0]
        got = imported.weeks[0].days[0].work[0]
        assert got.name == orig.name
        assert got.sets == orig.sets
        assert got.pct == pytest.approx(round_half_up(orig.pct * 100) / 100)
        assert [d.dow for d in imported.weeks[0].days] == [1, 2, 4, 5]

    def test_import_renumbers_week_gaps(self):
        from liftai.export import import_block_csv
        text = (
            "Week,Day,Exercise,Sets,Reps,Percentage,Notes\n"
            "3,Snatch Focus,Snatch,5,2,80,intensification|Snatch Focus\n"
            "1,Snatch Focus,Snatch,5,2,70,accumulation|Snatch Focus\n"
        )
        block = import_block_csv(text)
        assert [w.week_index for w in block.weeks] == [0, 1]
        assert [w.phase for w in block.weeks] == ["accumulation", "intensification"]
        assert block.block_length == 2

    def test_import_kinds_and_lift_keys(self):
        from liftai.export import import_block_csv
        text = (
            "Week,Day,Exercise,Sets,Reps,Percentage,Notes\n"
            "1,Clean & Jerk Focus,Clean Pull,4,3,85,accumulation|Clean & Jerk Focus\n"
            "1,Clean & Jerk Focus,Front Squat,4,3,80,accumulation|Clean & Jerk Focus\n"
            "1,Accessory + Core,Plank,3,1,,accumulation|Accessory + Core\n"
        )
        block = import_block_csv(text)
        day0, day1 = block.weeks[0].days
        assert day0.kind == "cj"
        assert [ex.lift_key for ex in day0.work] == ["cj", "fs"]
        assert day1.kind == "accessory"
        assert day1.work[0].pct == 0.0

    def test_bad_header_raises(self):
        from liftai.export import BlockImportError, import_block_csv
        with pytest.raises(BlockImportError):
            import_block_csv("Name,Value\nfoo,1\n")

    def test_no_valid_rows_raises(self):
        from liftai.export import BlockImportError, import_block_csv
        with pytest.raises(BlockImportError):
            import_block_csv("Week,Day,Exercise\n0,Day,Snatch\n1,Day,\n")


# ═══════════════════════════════════════════════════════════════════════
# REMOTE BACKUP
# ═══════════════════════════════════════════════════════════════════════

@pytest.fixture
def configured(monkeypatch):
    import liftai.cloud_client as cc
    monkeypatch.setattr(cc, "SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setattr(cc, "SUPABASE_ANON_KEY", "anon-key")
    sleeps = []
    monkeypatch.setattr(cc.time, "sleep", lambda s: sleeps.append(s))
    return sleeps


class TestCloudBackup:

    def test_backoff_is_capped(self):
        from liftai.cloud_client import backoff_delay
        assert [backoff_delay(a) for a in (1, 2, 3, 4, 5)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_unconfigured_is_skipped(self, monkeypatch):
        import liftai.cloud_client as cc
        monkeypatch.setattr(cc, "SUPABASE_URL", "")
        calls = []
        monkeypatch.setattr(cc.requests, "request", lambda *a, **k: calls.append(a))
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is False
        assert status["skipped"] is True
        assert calls == []

    def test_upsert_payload(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        seen = {}

        def fake_request(method, url, **kwargs):
            seen.update(kwargs, method=method, url=url)
            return _FakeResponse(201)

        monkeypatch.setattr(cc.requests, "request", fake_request)
        profile = _make_profile()
        block = _make_block(block_length=4)
        status = cc.backup_block(profile, block, "user-1")
        assert status["ok"] is True
        assert seen["method"] == "POST"
        assert seen["url"].endswith("/rest/v1/training_blocks")
        assert seen["params"] == {"on_conflict": "user_id,block_name"}
        assert "merge-duplicates" in seen["headers"]["Prefer"]
        assert seen["json"]["user_id"] == "user-1"
        assert seen["json"]["block_data"]["seed"] == 4242
        assert seen["json"]["profile_data"]["units"] == "kg"

    def test_retries_server_errors(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        responses = [_FakeResponse(503), _FakeResponse(502), _FakeResponse(201)]
        monkeypatch.setattr(cc.requests, "request", lambda *a, **k: responses.pop(0))
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is True
        assert configured == [1.0, 2.0]

    def test_retries_timeouts_then_reports(self, configured, monkeypatch):
        import liftai.cloud_client as cc

        def timeout(*a, **k):
            raise requests.exceptions.Timeout("slow")

        monkeypatch.setattr(cc.requests, "request", timeout)
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is False
        assert "slow" in status["error"]
        assert configured == [1.0, 2.0]

    def test_client_error_not_retried(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        calls = []

        def bad_request(*a, **k):
            calls.append(1)
            return _FakeResponse(400)

        monkeypatch.setattr(cc.requests, "request", bad_request)
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is False
        assert len(calls) == 1
        assert configured == []

    def test_rate_limit_exhausted(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        monkeypatch.setattr(cc.requests, "request", lambda *a, **k: _FakeResponse(429))
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is False
        assert configured == [1.0, 2.0]

    def test_payload_limit(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        monkeypatch.setattr(cc, "MAX_PAYLOAD_BYTES", 100)
        calls = []
        monkeypatch.setattr(cc.requests, "request", lambda *a, **k: calls.append(1))
        status = cc.backup_block(_make_profile(), _make_block(block_length=4), "user-1")
        assert status["ok"] is False
        assert "too large" in status["error"]
        assert calls == []

    def test_list_blocks(self, configured, monkeypatch):
        import liftai.cloud_client as cc
        rows = [{"block_name": "Default_1", "is_active": True, "created_at": "2026-01-01"}]
        monkeypatch.setattr(cc.requests, "request", lambda *a, **k: _FakeResponse(200, rows))
        assert cc.list_blocks("user-1") == rows
        assert cc.list_blocks("") == []


# ═══════════════════════════════════════════════════════════════════════
# ANALYTICS
# ═══════════════════════════════════════════════════════════════════════

class TestAnalytics:

    def test_block_frame(self):
        from liftai.analytics import PRESCRIPTION_COLUMNS, block_frame
        profile = _make_profile()
        block = _make_block(block_length=4)
        df = block_frame(block, profile)
        assert list(df.columns) == PRESCRIPTION_COLUMNS
        assert len(df) == sum(len(d.work) for w in block.weeks for d in w.days)
        main = (df["pct"] > 0) & df["lift_key"].isin(["snatch", "cj", "fs", "bs"])
        assert (df.loc[main, "weight"] > 0).all()

    def test_ari_in_range(self):
        from liftai.analytics import compute_block_ari
        ari = compute_block_ari(_make_block())
        assert 0.4 < ari < 1.0

    def test_k_value_needs_total(self):
        from liftai.analytics import compute_block_ari, compute_k_value
        block = _make_block()
        assert compute_k_value(block, 0) is None
        assert compute_k_value(block, 180) == pytest.approx(compute_block_ari(block) * 100)

    def test_week_wl_ari_only_competition_lifts(self):
        from liftai.analytics import estimate_week_wl_ari
        from liftai.models import DayPlan, ExercisePrescription, WeekPlan
        week = WeekPlan(0, "accumulation", 0.75, 1.0, [DayPlan("D", "snatch", "snatch", 2, [
            ExercisePrescription("Snatch", "snatch", 2, 2, 0.80),
            ExercisePrescription("Clean & Jerk", "cj", 2, 1, 0.70),
            ExercisePrescription("Back Squat", "bs", 5, 5, 0.50),
        ])])
        # (0.80×4 + 0.70×2) / 6
        assert estimate_week_wl_ari(week) == pytest.approx(4.6 / 6)
        assert estimate_week_wl_ari(None) == 0.0

    def test_interference_and_budget(self):
        from liftai.analytics import estimate_hypertrophy_set_budget, hypertrophy_interference_multiplier
        assert hypertrophy_interference_multiplier(0.85) == 0.8
        assert hypertrophy_interference_multiplier(0.80) == 0.9
        assert hypertrophy_interference_multiplier(0.70) == 1.0
        assert estimate_hypertrophy_set_budget(75) == 3
        assert estimate_hypertrophy_set_budget(40) == 0

    def test_weekly_summary(self):
        from liftai.analytics import weekly_summary
        df = weekly_summary(_make_block())
        assert len(df) == 8
        assert list(df["phase"][:4]) == ["accumulation", "accumulation", "intensification", "deload"]
        # Deload cuts volume
        assert df.loc[3, "total_sets"] < df.loc[1, "total_sets"]

    def test_block_summary(self):
        from liftai.analytics import block_summary
        profile = _make_profile()
        summary = block_summary(_make_block(block_length=4), profile)
        assert summary["weeks"] == 4
        assert summary["sessions"] == 16
        assert summary["k_value"] is not None

    def test_log_compliance(self):
        from liftai.analytics import log_compliance
        from liftai.setlog import SetLogStore
        assert log_compliance(SetLogStore().to_frame()).empty
        store = SetLogStore()
        log = store.day_log("Default", 0, 0)
        log.log_set(0, 0, "Snatch", action="make", rpe=7, status="done")
        log.log_set(0, 1, "Snatch", action="miss", rpe=9, status="done")
        out = log_compliance(store.to_frame())
        row = out.iloc[0]
        assert row["logged"] == 2
        assert row["make_rate"] == 50
        assert row["avg_rpe"] == 8.0

    def test_empty_block_frame(self):
        from liftai.analytics import weekly_summary
        from liftai.models import Block
        assert weekly_summary(Block(1, "x", "2026-01-01", "general", 4, [])).empty
        assert isinstance(weekly_summary(Block(1, "x", "2026-01-01", "general", 4, [])), pd.DataFrame)


# ═══════════════════════════════════════════════════════════════════════
# COMMAND LINE
# ═══════════════════════════════════════════════════════════════════════

class TestSync:

    def test_parse_weeks(self):
        from liftai.sync import parse_weeks
        assert parse_weeks(["sync", "--weeks", "6"]) == 6
        assert parse_weeks(["sync", "--weeks"]) is None
        assert parse_weeks(["sync", "--weeks", "six"]) is None
        assert parse_weeks(["sync"]) is None

    def test_dry_run_does_not_save(self, tmp_path):
        from liftai.sync import run_generate
        path = tmp_path / "state.json"
        result = run_generate(dry_run=True, weeks=4, state_path=str(path))
        assert len(result["block"].weeks) == 4
        assert not path.exists()

    def test_run_saves_state(self, tmp_path):
        from liftai.storage import load_state
        from liftai.sync import run_generate
        path = tmp_path / "state.json"
        result = run_generate(weeks=5, state_path=str(path))
        assert path.exists()
        assert load_state(str(path)).current_block.seed == result["block"].seed

    def test_backup_csv(self, tmp_path, monkeypatch):
        import liftai.sync as sync
        monkeypatch.setattr(sync, "BACKUP_DIR", str(tmp_path / "backup"))
        path = sync.backup_csv(_make_block(block_length=4), "Default")
        assert path.endswith(".csv")
        assert pd.read_csv(path).shape[0] > 0
