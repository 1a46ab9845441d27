#!/usr/bin/env python3
"""API client integration test for the Soul Builder server.

Drives a live server as a pure HTTP client through complete questionnaire
sessions with random answers, checking the invariants a client can observe:

  - start reports step 1 of 6
  - blank answers to required questions are rejected with 422 and do not
    advance the session
  - every accepted answer advances exactly one step
  - generate/export fail with 409 before completion and succeed after
  - a skipped signature renders the placeholder

Usage::

    # Install deps (first time only)
    uv pip install httpx rich

    # Quick smoke test
    uv run python scripts/run_client_test.py -n 1 -v

    # 50 sessions, reproducible
    uv run python scripts/run_client_test.py -n 50 --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

import httpx
from rich.console import Console
from rich.table import Table

API = "/api/v1"
TOTAL_STEPS = 6

NAMES = ["Aria", "Bodhi", "Cleo", "Dax", "Echo", "Fenn"]
ADJECTIVES = ["warm", "direct", "curious", "calm", "witty", "precise", "bold"]
VALUES = ["honesty", "craft", "patience", "courage", "clarity", "kindness"]
TONES = ["formal", "casual-professional", "casual", "technically precise"]
SIGNATURES = ["Stay curious.", "Let's build it.", "skip", "SKIP", "   "]


# ---------------------------------------------------------------------------
# AnswerGenerator
# ---------------------------------------------------------------------------

class AnswerGenerator:
    """Random answers for each question, plus the occasional blank."""

    def __init__(self, rng: random.Random, blank_rate: float = 0.2):
        self._rng = rng
        self._blank_rate = blank_rate

    def blank(self) -> bool:
        return self._rng.random() < self._blank_rate

    def answers(self) -> list[str]:
        r = self._rng
        name = r.choice(NAMES)
        return [
            name,
            ", ".join(r.sample(ADJECTIVES, 3)),
            ", ".join(r.sample(VALUES, 2)),
            r.choice(TONES),
            f"{name} was assembled from {r.randint(2, 9)} abandoned side projects.",
            r.choice(SIGNATURES),
        ]


# ---------------------------------------------------------------------------
# SessionRunner
# ---------------------------------------------------------------------------

@dataclass
class SessionResult:
    session_id: str
    name: str
    ok: bool = True
    rejected_blanks: int = 0
    elapsed: float = 0.0
    errors: list[str] = field(default_factory=list)

    def fail(self, msg: str) -> None:
        self.ok = False
        self.errors.append(msg)


class SessionRunner:
    """Runs one complete session and records invariant violations."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        answers: AnswerGenerator,
        console: Console,
        verbosity: int = 0,
    ):
        self._client = client
        self._answers = answers
        self._console = console
        self._verbosity = verbosity

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        resp = await self._client.post(f"{API}{path}", **kwargs)
        if self._verbosity >= 2:
            self._console.print(f"[dim]POST {path} -> {resp.status_code} {resp.text[:120]}[/]")
        return resp

    async def run(self) -> SessionResult:
        sid = f"client-{uuid.uuid4().hex[:12]}"
        answers = self._answers.answers()
        result = SessionResult(session_id=sid, name=answers[0])
        started = time.perf_counter()

        body = (await self._post(f"/sessions/{sid}/start")).json()
        if body.get("current_step") != 1 or body.get("total_steps") != TOTAL_STEPS:
            result.fail(f"start: unexpected progress {body}")

        premature = await self._post(f"/sessions/{sid}/generate")
        if premature.status_code != 409:
            result.fail(f"generate before completion returned {premature.status_code}")

        for step, answer in enumerate(answers, start=1):
            if step < TOTAL_STEPS and self._answers.blank():
                resp = await self._post(f"/sessions/{sid}/answer", json={"answer": "  "})
                if resp.status_code != 422 or resp.json().get("current_step") != step:
                    result.fail(f"step {step}: blank answer not rejected ({resp.status_code})")
                result.rejected_blanks += 1

            resp = await self._post(f"/sessions/{sid}/answer", json={"answer": answer})
            body = resp.json()
            if resp.status_code != 200 or body.get("current_step") != step + 1:
                result.fail(f"step {step}: expected step {step + 1}, got {body}")

        if body.get("is_complete") is not True:
            result.fail("session not complete after all answers")

        generated = (await self._post(f"/sessions/{sid}/generate")).json()
        doc = generated.get("document") or ""
        if f"**Name:** {result.name}" not in doc:
            result.fail("document missing agent name")
        if answers[-1].strip().lower() in ("skip", "") and "## Signature\n*" not in doc:
            result.fail("skipped signature did not render the placeholder")

        exported = await self._client.get(f"{API}/sessions/{sid}/export")
        if exported.json().get("document") != doc:
            result.fail("export differs from generate")

        result.elapsed = time.perf_counter() - started
        return result


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def print_summary(console: Console, results: list[SessionResult]) -> None:
    table = Table(title="Soul Builder client test")
    table.add_column("Sessions", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Blanks rejected", justify="right")
    table.add_column("Avg time (ms)", justify="right")

    passed = sum(1 for r in results if r.ok)
    avg_ms = 1000 * sum(r.elapsed for r in results) / max(len(results), 1)
    table.add_row(
        str(len(results)),
        str(passed),
        str(len(results) - passed),
        str(sum(r.rejected_blanks for r in results)),
        f"{avg_ms:.1f}",
    )
    console.print(table)

    for r in results:
        for err in r.errors:
            console.print(f"[red]{r.session_id}[/] {err}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Drive a live Soul Builder server through random sessions.",
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:3000",
        help="Server base URL (default: http://localhost:3000)",
    )
    parser.add_argument(
        "-n", "--runs",
        type=int, default=10,
        help="Number of sessions to run (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int, default=None,
        help="RNG seed for reproducible runs",
    )
    parser.add_argument(
        "--blank-rate",
        type=float, default=0.2,
        help="Probability of sending a blank answer before each required answer",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count", default=0,
        help="Increase output verbosity (-v, -vv)",
    )
    parser.add_argument(
        "--timeout",
        type=float, default=30.0,
        help="HTTP request timeout in seconds (default: 30)",
    )
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    console = Console()

    seed = args.seed if args.seed is not None else int(time.time())
    rng = random.Random(seed)
    console.print(f"[dim]RNG seed: {seed}[/]")

    results: list[SessionResult] = []
    async with httpx.AsyncClient(base_url=args.base_url, timeout=args.timeout) as client:
        try:
            health = await client.get("/health")
        except (httpx.ConnectError, httpx.TimeoutException):
            health = None
        if health is None or health.status_code != 200:
            console.print(
                f"[red]Server at {args.base_url} is not reachable. "
                f"Is the server running?[/]"
            )
            sys.exit(1)
        console.print(f"[green]Server health check passed[/] ({args.base_url})")

        runner = SessionRunner(
            client, AnswerGenerator(rng, blank_rate=args.blank_rate), console,
            verbosity=args.verbose,
        )
        for i in range(1, args.runs + 1):
            result = await runner.run()
            results.append(result)
            if args.verbose:
                status = "[green]PASS[/]" if result.ok else "[red]FAIL[/]"
                console.print(f"[{i}/{args.runs}] {status} {result.session_id} ({result.name})")

    print_summary(console, results)

    if any(not r.ok for r in results):
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
