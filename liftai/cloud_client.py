"""
LiftAI — Remote Backup Client (Supabase REST)

Best-effort upsert of generated blocks keyed on (user_id, block_name).
Generation never waits on this; failures come back as a status dict.
"""
import json
import time

import requests

from liftai.config import (
    MAX_PAYLOAD_BYTES, REQUEST_TIMEOUT, RETRY_BASE_DELAY, RETRY_MAX_ATTEMPTS,
    RETRY_MAX_DELAY, SUPABASE_ANON_KEY, SUPABASE_TABLE, SUPABASE_URL,
)


class PayloadTooLarge(ValueError):
    pass


def is_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)


def _headers(extra: dict = None) -> dict:
    headers = {
        "apikey": SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {SUPABASE_ANON_KEY}",
        "Content-Type": "application/json",
        "accept": "application/json",
    }
    headers.update(extra or {})
    return headers


def _endpoint() -> str:
    return f"{SUPABASE_URL.rstrip('/')}/rest/v1/{SUPABASE_TABLE}"


def backoff_delay(attempt: int) -> float:
    """min(base × 2^(attempt-1), cap) for 1-based attempts."""
    return min(RETRY_BASE_DELAY * 2 ** (attempt - 1), RETRY_MAX_DELAY)


def _request(method: str, params: dict = None, payload=None, headers: dict = None):
    """Retry on 429, timeouts, connection errors and 5xx; any other 4xx raises at once."""
    for attempt in range(1, RETRY_MAX_ATTEMPTS + 1):
        try:
            r = requests.request(
                method, _endpoint(), headers=_headers(headers),
                params=params or {}, json=payload, timeout=REQUEST_TIMEOUT,
            )
            if r.status_code == 429:
                if attempt < RETRY_MAX_ATTEMPTS:
                    wait = backoff_delay(attempt)
                    print(f"  ⏳ Backup rate limit, retrying in {wait}s (attempt {attempt}/{RETRY_MAX_ATTEMPTS})")
                    time.sleep(wait)
                continue
            r.raise_for_status()
            return r.json() if r.content else None
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError):
            if attempt < RETRY_MAX_ATTEMPTS:
                wait = backoff_delay(attempt)
                print(f"  ⏳ Backup connection problem, retrying in {wait}s (attempt {attempt}/{RETRY_MAX_ATTEMPTS})")
                time.sleep(wait)
            else:
                raise
        except requests.exceptions.HTTPError:
            if attempt < RETRY_MAX_ATTEMPTS and r.status_code >= 500:
                wait = backoff_delay(attempt)
                print(f"  ⏳ Backup {r.status_code}, retrying in {wait}s (attempt {attempt}/{RETRY_MAX_ATTEMPTS})")
                time.sleep(wait)
            else:
                raise
    raise requests.exceptions.RetryError(f"Backup store failed after {RETRY_MAX_ATTEMPTS} attempts")


# ═════════════════════════════════════════════════════════════════════
# BACKUP
# ═════════════════════════════════════════════════════════════════════

def block_name_for(profile, block) -> str:
    return f"{profile.name}_{block.seed}"


def build_payload(profile, block, user_id: str, is_active: bool = True) -> dict:
    return {
        "user_id": user_id,
        "block_name": block_name_for(profile, block),
        "block_data": block.to_dict(),
        "profile_data": {
            "maxes": dict(profile.maxes),
            "workingMaxes": dict(profile.working_maxes),
            "units": profile.units,
            "programType": profile.program_type,
            "volumePref": profile.volume_pref,
            "blockLength": profile.block_length,
        },
        "is_active": is_active,
    }


def check_payload_size(payload: dict) -> int:
    size = len(json.dumps(payload).encode("utf-8"))
    if size > MAX_PAYLOAD_BYTES:
        raise PayloadTooLarge(
            f"Block data too large ({size / 1024:.0f}KB, max {MAX_PAYLOAD_BYTES // 1024}KB)"
        )
    return size


def backup_block(profile, block, user_id: str) -> dict:
    """
    Upsert one block. Never raises: returns {"ok": bool, "error"?: str,
    "skipped"?: bool, "bytes"?: int}.
    """
    if not is_configured():
        return {"ok": False, "skipped": True, "error": "Remote backup not configured"}
    if not user_id:
        return {"ok": False, "error": "No user id"}

    payload = build_payload(profile, block, user_id)
    try:
        size = check_payload_size(payload)
        _request(
            "POST", params={"on_conflict": "user_id,block_name"}, payload=payload,
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )
    except PayloadTooLarge as e:
        print(f"  ❌ Backup refused: {e}")
        return {"ok": False, "error": str(e)}
    except requests.exceptions.RequestException as e:
        print(f"  ❌ Backup failed: {e}")
        return {"ok": False, "error": str(e)}

    print(f"  ✅ Backed up {payload['block_name']} ({size / 1024:.1f}KB)")
    return {"ok": True, "bytes": size}


def list_blocks(user_id: str) -> list:
    """Backed-up blocks for this user, newest first. Empty when unconfigured or on failure."""
    if not is_configured() or not user_id:
        return []
    try:
        rows = _request("GET", params={
            "user_id": f"eq.{user_id}",
            "select": "block_name,is_active,created_at",
            "order": "created_at.desc",
        })
    except requests.exceptions.RequestException as e:
        print(f"  ❌ Could not list backups: {e}")
        return []
    print(f"  📥 {len(rows or [])} backed-up blocks")
    return rows or []
