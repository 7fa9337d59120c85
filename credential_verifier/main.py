import argparse
import json
import sys
from dataclasses import asdict

from credential_verifier.config.settings import Settings
from credential_verifier.logging.logger import Log
from credential_verifier.verification.verifier import build_verifier


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="credential_verifier",
        description="Verify a candidate credential file against the issued reference.",
    )
    parser.add_argument("content_id", help="Content id of the issued credential")
    parser.add_argument("candidate_file", help="Path to the document being verified")
    parser.add_argument(
        "--declared-type",
        default=None,
        help="Credential type on record for the issued document, e.g. 'Transcript'",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build verifier -> print the result as JSON."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    verifier = build_verifier(settings)
    outcome = verifier.verify(args.content_id, args.candidate_file, args.declared_type)
    print(json.dumps(asdict(outcome), indent=2, ensure_ascii=False))
    return 0 if outcome.success else 1


if __name__ == "__main__":
    sys.exit(main())
