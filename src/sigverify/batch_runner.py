"""
Batch verification: runs every request in order and sorts the outcomes into
"valid" and "invalid" buckets.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from sigverify.batch_parser import parse
from sigverify.errors import BatchFileNotFoundError, BatchFileReadError, ItemShapeError
from sigverify.log_helper import get_logger
from sigverify.signature_helper import signature_verify
from sigverify.verifier import Failure, VerificationRequest, VerifyFn, verify

log = get_logger("batch_runner")

EXIT_OK = 0
EXIT_INVALID = 2


@dataclass
class BatchReport:
    valid: list[dict[str, Any]] = field(default_factory=list)
    invalid: list[dict[str, Any]] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_OK if not self.invalid else EXIT_INVALID

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {"valid": self.valid, "invalid": self.invalid}


def _check_shape(index: int, request) -> VerificationRequest:
    if isinstance(request, VerificationRequest):
        fields = request.item()
    elif isinstance(request, (list, tuple)) and len(request) == 3:
        fields = list(request)
    else:
        raise ItemShapeError("Entry is not a [message, signature, signer] triplet", {"item": request})

    if not all(isinstance(v, str) for v in fields):
        raise ItemShapeError("Entry fields must be strings", {"item": fields})
    return VerificationRequest(fields[0], fields[1], fields[2], index=index)


def _item_of(request) -> Any:
    if isinstance(request, VerificationRequest):
        return request.item()
    if isinstance(request, tuple):
        return list(request)
    return request


def run(requests: Sequence, verify_fn: VerifyFn = signature_verify) -> BatchReport:
    """
    Verify every request in order.

    Args:
        requests: VerificationRequests or (message, signature, signer) triplets;
            position in the sequence is the item index
        verify_fn: Backend passed through to verify()

    Returns:
        BatchReport with both buckets in index order
    """
    report = BatchReport()

    for index, raw in enumerate(requests):
        try:
            request = _check_shape(index, raw)
        except ItemShapeError as e:
            log.warning("Item %d: %s", index, e)
            report.invalid.append({"index": index, "error": e.message, "item": _item_of(raw)})
            continue

        outcome = verify(request, verify_fn)
        if isinstance(outcome, Failure):
            report.invalid.append({"index": index, "error": outcome.error, "item": request.item()})
            continue

        record = {
            "index": index,
            "message": request.message,
            "signature": request.signature,
            "signer": request.signer,
            "isValid": outcome.is_valid,
            "crypto": outcome.scheme,
            "publicKey": outcome.public_key_hex,
        }
        if outcome.is_valid:
            report.valid.append(record)
        else:
            report.invalid.append(record)

    log.info("Batch done: %d valid, %d invalid", len(report.valid), len(report.invalid))
    return report


def read_batch(path: Path) -> list[VerificationRequest]:
    """
    Read and parse a batch file.

    Raises:
        BatchFileNotFoundError: the file does not exist
        BatchFileReadError: the file exists but cannot be read as UTF-8 text
        BatchFormatError: the content matches neither batch grammar
    """
    path = Path(path)
    if not path.exists():
        raise BatchFileNotFoundError(f"Batch file not found: {path}", {"path": str(path)})
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise BatchFileReadError(f"Cannot read batch file {path}: {e}", {"path": str(path)})

    return [
        VerificationRequest(message, signature, signer, index=i)
        for i, (message, signature, signer) in enumerate(parse(content))
    ]


def run_file(path: Path, verify_fn: VerifyFn = signature_verify) -> BatchReport:
    """Read, parse and verify a batch file."""
    requests = read_batch(path)
    log.info("Loaded %d entries from %s", len(requests), path)
    return run(requests, verify_fn)
