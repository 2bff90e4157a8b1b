#!/usr/bin/env python3
"""
verify: check Substrate signatures from the command line.

    verify <message> <signature> <address_or_publicKey>
    verify --file <path>
    verify                      (batch mode on the default batch file)
"""
import json
import sys
from pathlib import Path
from typing import Optional

from sigverify import batch_runner
from sigverify.config import Config, load_config
from sigverify.errors import SigVerifyError, UsageError, VerificationError
from sigverify.log_helper import configure, get_logger
from sigverify.signature_helper import wait_ready
from sigverify.verifier import Failure, VerificationRequest, verify

log = get_logger("cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2

USAGE = (
    "Usage: verify <message> <signature> <address_or_publicKey>\n"
    "       verify --file <path>\n"
    "       verify                 (batch file from SIGVERIFY_BATCH_FILE, default examples/batch.json)\n\n"
    "- message: raw string, hex (0x...), or base64\n"
    "- signature: hex (0x...) or base64\n"
    "- address_or_publicKey: SS58 address or 32-byte public key (hex/base64)\n"
    "- batch file: JSON array of [message, signature, signer] arrays, or text with [a, b, c] groups"
)


def emit(document: dict) -> None:
    print(json.dumps(document, indent=2))


def parse_args(argv: list[str], config: Config) -> tuple[str, object]:
    """
    Decide the mode from the arguments (program name excluded).

    Returns:
        ("help", None), ("single", (message, signature, signer)) or ("batch", path)

    Raises:
        UsageError: for a missing --file value or a wrong number of arguments
    """
    if not argv:
        return "batch", config.batch_file

    if argv[0] in ("-h", "--help"):
        return "help", None

    if argv[0] == "--file":
        if len(argv) != 2 or not argv[1]:
            raise UsageError("--file requires exactly one path")
        return "batch", Path(argv[1])
    if argv[0].startswith("--file="):
        if len(argv) != 1 or argv[0] == "--file=":
            raise UsageError("--file requires exactly one path")
        return "batch", Path(argv[0][len("--file="):])

    if len(argv) != 3 or not all(argv):
        raise UsageError("expected <message> <signature> <address_or_publicKey>")
    return "single", (argv[0], argv[1], argv[2])


def run_single(message: str, signature: str, signer: str) -> int:
    outcome = verify(VerificationRequest(message, signature, signer))
    if isinstance(outcome, Failure):
        raise VerificationError(outcome.error)
    emit({
        "isValid": outcome.is_valid,
        "crypto": outcome.scheme,
        "publicKey": outcome.public_key_hex,
    })
    return EXIT_OK if outcome.is_valid else EXIT_INVALID


def run_batch(path: Path) -> int:
    report = batch_runner.run_file(path)
    emit(report.to_dict())
    return report.exit_code


def main(argv: Optional[list[str]] = None, config: Optional[Config] = None) -> int:
    """
    Entry point. Returns the process exit code.

    0: all checks valid, 1: usage/setup error, 2: at least one check invalid
    """
    if argv is None:
        argv = sys.argv[1:]
    if config is None:
        config = load_config()
    configure(config.log_level)

    try:
        mode, value = parse_args(argv, config)
    except UsageError as e:
        print(f"Error: {e}\n\n{USAGE}", file=sys.stderr)
        return EXIT_ERROR

    if mode == "help":
        print(USAGE)
        return EXIT_OK

    try:
        wait_ready()
        if mode == "single":
            return run_single(*value)
        return run_batch(value)
    except SigVerifyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        log.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
