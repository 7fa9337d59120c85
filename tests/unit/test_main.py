import json
from unittest.mock import MagicMock, patch

import pytest

from credential_verifier.main import main, parse_args
from credential_verifier.verification.models import FailureKind, VerificationFailure


class TestParseArgs:
    def test_positional_and_declared_type(self) -> None:
        args = parse_args(["QmAbc", "upload.pdf", "--declared-type", "Transcript"])
        assert args.content_id == "QmAbc"
        assert args.candidate_file == "upload.pdf"
        assert args.declared_type == "Transcript"

    def test_declared_type_optional(self) -> None:
        assert parse_args(["QmAbc", "upload.pdf"]).declared_type is None


class TestMain:
    def test_failure_printed_as_json_with_nonzero_exit(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        verifier = MagicMock()
        verifier.verify.return_value = VerificationFailure(
            error=FailureKind.FETCH_FAILED,
            message="Could not fetch the issued credential from the content store.",
            detail="Content store returned 404 for QmAbc",
        )
        with (
            patch("credential_verifier.main.build_verifier", return_value=verifier),
            patch("credential_verifier.main.Log") as log,
        ):
            code = main(["QmAbc", "upload.pdf", "--declared-type", "Diploma"])

        assert code == 1
        log.configure.assert_called_once()
        verifier.verify.assert_called_once_with("QmAbc", "upload.pdf", "Diploma")
        printed = json.loads(capsys.readouterr().out)
        assert printed["error"] == "fetch_failed"
        assert printed["success"] is False
