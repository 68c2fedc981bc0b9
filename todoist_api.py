#!/usr/bin/env python3
# todoist_api.py
"""
Todoist Sync API client (stats only).
POST /api/v1/sync with a bearer token; retries 429/5xx/timeouts with capped
exponential backoff or the server's Retry-After.
"""

import time
from typing import Any, Dict, Optional

import requests

from errors import NoStatsInResponse, TodoistApiError
from runlog import log
from stats import StatsPayload

API_URL      = "https://api.todoist.com/api/v1/sync"
TIMEOUT_S    = 10
MAX_RETRIES  = 3
BACKOFF_BASE = 1.0
BACKOFF_CAP  = 30.0
USER_AGENT   = "todoist-readme-stats/1.0"

def _retry_delay(resp: Optional[requests.Response], attempt: int) -> float:
    if resp is not None:
        ra = resp.headers.get("Retry-After")
        if ra:
            try:
                return min(max(0.0, float(ra)), BACKOFF_CAP)
            except ValueError:
                pass  # HTTP-date form; fall back to exponential
    return min(BACKOFF_BASE * (2 ** attempt), BACKOFF_CAP)

def _retryable(status: int) -> bool:
    return status == 429 or status >= 500

def _response_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason or f"HTTP {resp.status_code}"

def http_error(resp: requests.Response) -> TodoistApiError:
    s = resp.status_code
    if s == 401:
        return TodoistApiError("auth", "Authentication failed. Check your TODOIST_API_KEY is valid.", s)
    if s == 403:
        return TodoistApiError("forbidden", "Access forbidden. Your API key may lack required permissions.", s)
    if s == 404:
        return TodoistApiError("not_found", "Stats endpoint not found. Todoist API may have changed.", s)
    if s == 429:
        return TodoistApiError("rate_limited", "Rate limited by Todoist API. Try again later.", s)
    if s >= 500:
        return TodoistApiError("server", f"Todoist server error ({s}). Try again later.", s)
    return TodoistApiError("http", f"Todoist API error ({s}): {_response_message(resp)}", s)

def transport_error(e: requests.RequestException) -> TodoistApiError:
    if isinstance(e, requests.Timeout):
        return TodoistApiError("timeout", "Request timed out. Todoist API may be slow or unreachable.")
    if isinstance(e, requests.ConnectionError):
        return TodoistApiError("network", "No response from Todoist API. Check network connectivity.")
    return TodoistApiError("request", f"Failed to call Todoist API: {e}")

def fetch_sync(api_key: str, session: Optional[requests.Session] = None,
               max_retries: int = MAX_RETRIES, sleep=time.sleep) -> Dict[str, Any]:
    """Raw Sync API response as a dict. Raises TodoistApiError."""
    own = session is None
    sess = session or requests.Session()
    sess.headers.update({"User-Agent": USER_AGENT})
    headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
    body = {"sync_token": "*", "resource_types": '["all"]'}
    try:
        attempt = 0
        while True:
            try:
                r = sess.post(API_URL, json=body, headers=headers, timeout=TIMEOUT_S)
            except (requests.Timeout, requests.ConnectionError) as e:
                if attempt >= max_retries:
                    raise transport_error(e) from e
                wait = _retry_delay(None, attempt)
                log(f"[warn] todoist request failed ({type(e).__name__}), retry {attempt+1}/{max_retries} in {wait:.1f}s")
                sleep(wait); attempt += 1
                continue
            except requests.RequestException as e:
                raise transport_error(e) from e

            if _retryable(r.status_code) and attempt < max_retries:
                wait = _retry_delay(r, attempt)
                log(f"[warn] todoist HTTP {r.status_code}, retry {attempt+1}/{max_retries} in {wait:.1f}s")
                sleep(wait); attempt += 1
                continue
            if r.status_code >= 400:
                raise http_error(r)
            try:
                data = r.json()
            except ValueError as e:
                raise TodoistApiError("http", "Todoist API returned a non-JSON body", r.status_code) from e
            if not isinstance(data, dict):
                raise NoStatsInResponse([])
            return data
    finally:
        if own:
            sess.close()

def fetch_stats(api_key: str, session: Optional[requests.Session] = None, **kw) -> StatsPayload:
    data = fetch_sync(api_key, session=session, **kw)
    stats = data.get("stats")
    if not isinstance(stats, dict) or not stats:
        raise NoStatsInResponse(data.keys())
    return StatsPayload.from_response(stats, data.get("user"))
