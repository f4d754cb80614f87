#!/usr/bin/env python3

"""Simple CLI to summarize text using the local summarizer service.

The text is submitted to /v1/summaries endpoint and the request status is
polled until it reaches terminal state.
"""

import argparse
import os
import sys
import time
from time import perf_counter

import requests

DEFAULT_URL = os.getenv("SUMMARIZER_URL", "http://localhost:8080/v1")
TERMINAL_STATES = ("completed", "error")


def main() -> int:  # pylint: disable=too-many-return-statements
    """Entry point to this tool."""
    parser = argparse.ArgumentParser(
        description="Summarize text file with the local summarizer service."
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="File with text to summarize, standard input when omitted.",
    )
    parser.add_argument(
        "--provider",
        default="openai",
        choices=["claude", "openai", "openrouter", "portkey"],
        help="LLM provider (default: openai).",
    )
    parser.add_argument(
        "--api-key",
        default=os.getenv("SUMMARIZER_API_KEY"),
        help="Provider API key, configured default is used when omitted.",
    )
    parser.add_argument(
        "--language",
        default="english",
        choices=["chinese", "english"],
        help="Language of the summary (default: english).",
    )
    parser.add_argument(
        "--content-key",
        help="Content key (URL) used to cache the summary.",
    )
    parser.add_argument(
        "--force-refresh",
        action="store_true",
        help="Do not use cached summary.",
    )
    parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help=f"Service URL. Defaults to env SUMMARIZER_URL or {DEFAULT_URL!r}.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=120,
        help="Overall timeout in seconds (default: 120).",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=1,
        help="Status polling interval in seconds (default: 1).",
    )
    args = parser.parse_args()

    if args.input:
        with open(args.input, encoding="utf-8") as fin:
            text = fin.read()
    else:
        text = sys.stdin.read()

    payload = {
        "text": text,
        "provider": args.provider,
        "language": args.language,
        "force_refresh": args.force_refresh,
    }
    if args.api_key:
        payload["api_key"] = args.api_key
    if args.content_key:
        payload["url"] = args.content_key

    t0 = perf_counter()
    try:
        resp = requests.post(
            url=f"{args.url}/summaries", json=payload, timeout=args.timeout
        )
        resp.raise_for_status()
        request_id = resp.json()["request_id"]

        while True:
            resp = requests.get(
                url=f"{args.url}/summaries/{request_id}", timeout=args.timeout
            )
            resp.raise_for_status()
            obj = resp.json()
            if obj["status"] in TERMINAL_STATES:
                break
            if perf_counter() - t0 > args.timeout:
                print(f"Request {request_id} did not finish in time", file=sys.stderr)
                return 4
            time.sleep(args.poll_interval)
    except requests.exceptions.RequestException as e:
        elapsed = perf_counter() - t0
        print(f"Request failed after {elapsed:.2f}s: {e}", file=sys.stderr)
        return 1
    except (ValueError, KeyError):
        print("Server response is not valid JSON.", file=sys.stderr)
        print(resp.text[:1000], file=sys.stderr)
        return 2

    elapsed = perf_counter() - t0
    if obj["status"] == "error":
        print(obj.get("error"), file=sys.stderr)
        return 3

    result = obj["result"]
    print(result["summary"])
    if result.get("from_cache"):
        print("(cached summary)")
    print(f"Response time {elapsed:.2f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
