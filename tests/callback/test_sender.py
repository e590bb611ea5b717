import json
import pytest
from unittest.mock import MagicMock, patch
import httpx
from qr_relay.callback.sender import send_webhook
from qr_relay.callback.payloads import build_webhook_payload
from qr_relay.callback.signing import derive_secret, verify_signature
from qr_relay.settings import settings

SECRET = derive_secret("inst-1", "key-1")

@pytest.fixture(autouse=True)
def webhook_path():
    settings.WEBHOOK_PATH = "/api/bot-webhook"
    yield

def _ok_response(code=200):
    resp = MagicMock()
    resp.status_code = code
    resp.text = ""
    return resp

def test_build_payload_omits_empty_optionals():
    p = build_webhook_payload("inst-1", "configuring")
    assert p == {"instance_id": "inst-1", "status": "configuring"}
    p = build_webhook_payload("inst-1", "qr_ready", qr_base64="XYZ", phone="+100")
    assert p["qr_base64"] == "XYZ"
    assert p["phone"] == "+100"

@patch("httpx.Client.post")
def test_send_webhook_posts_signed_exact_body(mock_post):
    mock_post.return_value = _ok_response(200)

    result = send_webhook("http://dash.example", "inst-1", SECRET, "qr_ready", "XYZ")

    assert result == 200
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "http://dash.example/api/bot-webhook"
    body = kwargs["content"]
    headers = kwargs["headers"]
    assert headers["Content-Type"] == "application/json"
    assert verify_signature(body, SECRET, headers["X-Webhook-Signature"])

    decoded = json.loads(body)
    assert decoded == {"instance_id": "inst-1", "status": "qr_ready", "qr_base64": "XYZ"}
    assert "phone" not in decoded

@patch("httpx.Client.post")
def test_send_webhook_trims_trailing_slash(mock_post):
    mock_post.return_value = _ok_response(204)
    send_webhook("https://dash.example/", "inst-1", SECRET, "configuring")
    assert mock_post.call_args.args[0] == "https://dash.example/api/bot-webhook"
    assert json.loads(mock_post.call_args.kwargs["content"]) == {"instance_id": "inst-1", "status": "configuring"}

@patch("qr_relay.callback.sender.log")
@patch("httpx.Client.post")
def test_send_webhook_skips_without_url(mock_post, mock_log):
    result = send_webhook("", "inst-1", SECRET, "configuring")
    assert result is None
    mock_post.assert_not_called()
    mock_log.assert_called_with(event="webhook_skipped_no_url", status="configuring")

@patch("qr_relay.callback.sender.log")
@patch("httpx.Client.post")
def test_send_webhook_transport_error_is_logged_not_raised(mock_post, mock_log):
    mock_post.side_effect = httpx.ConnectError("refused")

    result = send_webhook("http://dash.example", "inst-1", SECRET, "qr_ready", "XYZ")

    assert result is None
    assert mock_log.call_args.kwargs["event"] == "webhook_send_exception"
    assert mock_log.call_args.kwargs["errorType"] == "ConnectError"

@patch("qr_relay.callback.sender.log")
@patch("httpx.Client.post")
def test_send_webhook_non_2xx_is_logged_once_without_retry(mock_post, mock_log):
    resp = _ok_response(500)
    resp.text = "boom"
    mock_post.return_value = resp

    result = send_webhook("http://dash.example", "inst-1", SECRET, "qr_ready", "XYZ")

    assert result == 500
    mock_post.assert_called_once()
    assert mock_log.call_args.kwargs["event"] == "webhook_send_failed"
    assert mock_log.call_args.kwargs["statusCode"] == 500
