import pytest

from lambda_runtime_client import MissingMetadata, extract_invocation_request
from lambda_runtime_client.metadata import FUNCTION_ARN_HEADER, REQUEST_ID_HEADER, parse_deadline

ARN = "arn:aws:lambda:us-east-1:123456789012:function:fn"


def test_extract_reads_all_known_headers() -> None:
    headers = {
        "Lambda-Runtime-Aws-Request-Id": "abc-123",
        "Lambda-Runtime-Invoked-Function-Arn": ARN,
        "Lambda-Runtime-Deadline-Ms": "1700000000000",
        "Lambda-Runtime-Trace-Id": "Root=1-5759e988-bd862e3fe1be46a994272793",
        "Lambda-Runtime-Client-Context": '{"client": {}}',
        "Lambda-Runtime-Cognito-Identity": '{"cognitoIdentityId": "id"}',
        "Content-Type": "application/json",
    }
    request = extract_invocation_request(headers, b'{"k":"v"}')
    assert request.id == "abc-123"
    assert request.invoked_function_arn == ARN
    assert request.deadline_epoch_ms == 1700000000000
    assert request.trace_id == "Root=1-5759e988-bd862e3fe1be46a994272793"
    assert request.client_context == '{"client": {}}'
    assert request.cognito_identity == '{"cognitoIdentityId": "id"}'
    assert request.content == b'{"k":"v"}'


def test_optional_fields_default_to_none() -> None:
    request = extract_invocation_request(
        {REQUEST_ID_HEADER: "id", FUNCTION_ARN_HEADER: ARN}, b""
    )
    assert request.trace_id is None
    assert request.client_context is None
    assert request.cognito_identity is None
    assert request.deadline_epoch_ms == 0
    assert request.content == b""


def test_lowercase_header_names_match() -> None:
    pairs = [
        ("lambda-runtime-aws-request-id", "id"),
        ("lambda-runtime-invoked-function-arn", ARN),
    ]
    request = extract_invocation_request(pairs, b"x")
    assert request.id == "id"
    assert request.invoked_function_arn == ARN


@pytest.mark.parametrize(
    ("pairs", "missing"),
    [
        ([(FUNCTION_ARN_HEADER, ARN)], REQUEST_ID_HEADER),
        ([(REQUEST_ID_HEADER, "id")], FUNCTION_ARN_HEADER),
        ([("Lambda-Runtime-Deadline-Ms", "5"), ("Lambda-Runtime-Trace-Id", "t")], REQUEST_ID_HEADER),
        ([("X-Other", "1"), (REQUEST_ID_HEADER, "id"), ("Lambda-Runtime-Trace-Id", "t")], FUNCTION_ARN_HEADER),
    ],
)
def test_missing_required_header_raises(pairs, missing: str) -> None:
    with pytest.raises(MissingMetadata) as info:
        extract_invocation_request(pairs, b"")
    assert info.value.field == missing


def test_header_order_does_not_matter() -> None:
    pairs = [
        ("Unrelated", "x"),
        (FUNCTION_ARN_HEADER, ARN),
        ("Lambda-Runtime-Deadline-Ms", "10"),
        (REQUEST_ID_HEADER, "late-id"),
    ]
    request = extract_invocation_request(pairs, b"")
    assert request.id == "late-id"


def test_repeated_header_keeps_last_value() -> None:
    pairs = [
        (REQUEST_ID_HEADER, "first"),
        (FUNCTION_ARN_HEADER, ARN),
        (REQUEST_ID_HEADER, "second"),
    ]
    assert extract_invocation_request(pairs, b"").id == "second"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1700000000000", 1700000000000),
        (None, 0),
        ("not-a-number", 0),
        ("", 0),
        ("1_000", 0),
        (" 1700000000000", 0),
        ("1700000000000\n", 0),
        ("１７", 0),
        ("-5", -5),
    ],
)
def test_parse_deadline(raw, expected: int) -> None:
    assert parse_deadline(raw) == expected


def test_bad_deadline_does_not_fail_extraction() -> None:
    request = extract_invocation_request(
        {REQUEST_ID_HEADER: "id", FUNCTION_ARN_HEADER: ARN, "Lambda-Runtime-Deadline-Ms": "not-a-number"},
        b"",
    )
    assert request.deadline_epoch_ms == 0


def test_body_bytes_are_copied_verbatim() -> None:
    body = b"\x00\xff\xfe not utf-8 \x80"
    request = extract_invocation_request({REQUEST_ID_HEADER: "id", FUNCTION_ARN_HEADER: ARN}, body)
    assert request.content == body
