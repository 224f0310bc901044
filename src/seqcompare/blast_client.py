"""BLAST request building and NCBI URL-API submission built on top of requests."""

from __future__ import annotations

import hashlib
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

import requests

from .errors import BlastSubmissionError
from .utils_seq import SequenceEntry, SequenceType, fasta_payload, infer_sequence_type

LOGGER = logging.getLogger(__name__)

BLAST_URL = "https://blast.ncbi.nlm.nih.gov/Blast.cgi"

_PROGRAMS = {
    SequenceType.PROTEIN: ("blastp", "nr"),
    SequenceType.NUCLEOTIDE: ("blastn", "nt"),
}

_RID_PATTERN = re.compile(r"^\s*RID = (\S+)", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class BlastRequest:
    program: str
    database: str
    query: str


def build_blast_request(
    entry: SequenceEntry, sequence_type: SequenceType | None = None
) -> BlastRequest:
    """blastp against nr for proteins, blastn against nt for nucleotides."""
    resolved = sequence_type or infer_sequence_type(entry.sequence)
    program, database = _PROGRAMS[resolved]
    return BlastRequest(program=program, database=database, query=fasta_payload(entry))


def local_blast_command(request: BlastRequest, query_path: str | Path) -> str:
    return f"{request.program} -query {query_path} -db {request.database}"


def parse_request_id(text: str) -> str | None:
    match = _RID_PATTERN.search(text)
    return match.group(1) if match else None


class RequestIdCache:
    """Remembers the RID of each submitted query as one small text file."""

    def __init__(self, cache_dir: Path | None) -> None:
        self.cache_dir = cache_dir

    def _path(self, request: BlastRequest) -> Path | None:
        if self.cache_dir is None:
            return None
        key = "::".join([request.program, request.database, request.query])
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"blast_{digest}.rid"

    def get(self, request: BlastRequest) -> str | None:
        path = self._path(request)
        if path is None or not path.exists():
            return None
        return path.read_text(encoding="utf-8").strip() or None

    def put(self, request: BlastRequest, rid: str) -> None:
        path = self._path(request)
        if path is None:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rid, encoding="utf-8")


@dataclass(slots=True)
class BlastClientConfig:
    email: str
    tool: str
    rate_limit_sec: float = 10.0
    cache_dir: Path | None = None


class BlastClient:
    """Submit queries to NCBI web BLAST with rate limiting."""

    def __init__(self, config: BlastClientConfig, session: requests.Session | None = None) -> None:
        if not config.email:
            raise ValueError("BLAST email must be provided.")
        if not config.tool:
            raise ValueError("BLAST tool value must be provided.")
        self._config = config
        self._session = session or requests.Session()
        self._cache = RequestIdCache(config.cache_dir)
        self._last_call = 0.0

    def _throttle(self) -> None:
        now = time.monotonic()
        delta = now - self._last_call
        wait = max(0.0, self._config.rate_limit_sec - delta)
        if self._last_call and wait:
            time.sleep(wait)

    def _post(self, data: dict) -> requests.Response:
        self._throttle()
        payload = {
            **data,
            "EMAIL": self._config.email,
            "TOOL": self._config.tool,
        }
        response = self._session.post(BLAST_URL, data=payload, timeout=60)
        response.raise_for_status()
        self._last_call = time.monotonic()
        return response

    def submit(self, request: BlastRequest) -> str:
        """Queue a search and return its request id (RID)."""
        cached = self._cache.get(request)
        if cached:
            LOGGER.info("Reusing cached BLAST request id %s", cached)
            return cached

        response = self._post(
            {
                "CMD": "Put",
                "PROGRAM": request.program,
                "DATABASE": request.database,
                "QUERY": request.query,
            }
        )
        rid = parse_request_id(response.text)
        if rid is None:
            raise BlastSubmissionError("NCBI BLAST response did not contain a request id.")
        LOGGER.info("Submitted %s search against %s: RID %s", request.program, request.database, rid)
        self._cache.put(request, rid)
        return rid
