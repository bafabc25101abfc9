import io
import pytest
import httpx
from pos_skills.cli import run_skill, run_umbrella, skill_main
from pos_skills.errors import (
    EXIT_CONFIG,
    EXIT_REMOTE_API,
    EXIT_TRANSPORT,
    EXIT_USAGE,
    EXIT_WRITE_NOT_CONFIRMED,
)
from pos_skills.skills.employees import EMPLOYEES
from pos_skills.skills.suppliers import SUPPLIERS
from conftest import RecordingTransport

BASE_URL = "https://pos.pages.fm/api/v1"
PURCHASE_ID = "fb056b32-9cf6-4c5a-92de-0eb94db71121"


async def invoke(skill, argv, transport, stdin=b""):
    stdout = io.BytesIO()
    stderr = io.StringIO()
    code = await run_skill(skill, argv, io.BytesIO(stdin), stdout, stderr, transport=transport)
    return code, stdout.getvalue(), stderr.getvalue()


@pytest.mark.asyncio
async def test_missing_shop_id(monkeypatch, transport):
    monkeypatch.setenv("POS_API_KEY", "abc")
    code, out, err = await invoke(SUPPLIERS, ["list"], transport)
    assert code == EXIT_CONFIG
    assert "SHOP_ID" in err
    assert out == b""
    assert transport.requests == []


@pytest.mark.asyncio
async def test_missing_api_key(monkeypatch, transport):
    monkeypatch.setenv("SHOP_ID", "123")
    code, _, err = await invoke(EMPLOYEES, ["list"], transport)
    assert code == EXIT_CONFIG
    assert "POS_API_KEY" in err
    assert transport.requests == []


@pytest.mark.asyncio
async def test_purchases_with_query(pos_env):
    canned = b'{"data":[{"id":"fb056b32","status":1}],"success":true}'
    transport = RecordingTransport(response=httpx.Response(200, content=canned))

    code, out, err = await invoke(SUPPLIERS, ["purchases", "?status=1"], transport)

    assert code == 0
    assert len(transport.requests) == 1
    sent = transport.requests[0]
    assert sent.method == "GET"
    assert str(sent.url) == f"{BASE_URL}/shops/123/purchases?status=1&api_key=abc"
    assert out == canned


@pytest.mark.asyncio
async def test_purchases_default_pagination(pos_env, transport):
    await invoke(SUPPLIERS, ["purchases"], transport)
    assert str(transport.requests[0].url) == f"{BASE_URL}/shops/123/purchases?page=1&page_size=30&api_key=abc"


@pytest.mark.asyncio
async def test_list_uses_legacy_api_key(monkeypatch, transport):
    monkeypatch.setenv("SHOP_ID", "123")
    monkeypatch.setenv("API_KEY", "legacy")
    code, _, _ = await invoke(EMPLOYEES, ["list"], transport)
    assert code == 0
    assert str(transport.requests[0].url) == f"{BASE_URL}/shops/123/users?api_key=legacy"


@pytest.mark.asyncio
async def test_custom_base_url(pos_env, transport):
    pos_env.setenv("POS_BASE_URL", "http://localhost:9000/api/v1/")
    await invoke(SUPPLIERS, ["list", "?page=2"], transport)
    assert str(transport.requests[0].url) == "http://localhost:9000/api/v1/shops/123/supplier?page=2&api_key=abc"


@pytest.mark.asyncio
@pytest.mark.parametrize("confirm", [None, "", "yes", "NO"])
async def test_update_purchase_requires_confirmation(pos_env, transport, confirm):
    if confirm is not None:
        pos_env.setenv("CONFIRM_WRITE", confirm)
    code, out, err = await invoke(
        SUPPLIERS, ["update-purchase", PURCHASE_ID], transport, stdin=b'{"purchase":{"status":1}}'
    )
    assert code == EXIT_WRITE_NOT_CONFIRMED
    assert "write not confirmed" in err
    assert out == b""
    assert transport.requests == []


@pytest.mark.asyncio
async def test_update_purchase_forwards_stdin(pos_env, transport):
    pos_env.setenv("CONFIRM_WRITE", "YES")
    body = b'{"purchase":{"status":1,"warehouse_id":"c52e67ad-d9d0-4276-abe4-e0c9f1f7d2da"}}\n'

    code, _, _ = await invoke(SUPPLIERS, ["update-purchase", PURCHASE_ID], transport, stdin=body)

    assert code == 0
    sent = transport.requests[0]
    assert sent.method == "PUT"
    assert str(sent.url) == f"{BASE_URL}/shops/123/purchases/{PURCHASE_ID}?api_key=abc"
    assert sent.content == body
    assert sent.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_split_purchase_forwards_stdin(pos_env, transport):
    pos_env.setenv("CONFIRM_WRITE", "YES")
    body = b'{"purchase_id":"fb056b32","items":[{"variation_id":"29044dcf","quantity":4}]}'

    code, _, _ = await invoke(SUPPLIERS, ["split-purchase"], transport, stdin=body)

    assert code == 0
    sent = transport.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == f"{BASE_URL}/shops/123/purchases/separate?api_key=abc"
    assert sent.content == body


@pytest.mark.asyncio
async def test_update_purchase_without_id(pos_env, transport):
    pos_env.setenv("CONFIRM_WRITE", "YES")
    code, _, err = await invoke(SUPPLIERS, ["update-purchase"], transport, stdin=b"{}")
    assert code == EXIT_USAGE
    assert "PURCHASE_ID required" in err
    assert transport.requests == []


@pytest.mark.asyncio
async def test_unknown_command(transport):
    code, out, err = await invoke(SUPPLIERS, ["foo"], transport)
    assert code == EXIT_USAGE
    assert "Unknown command: foo" in err
    assert "pos-suppliers help" in err
    assert out == b""
    assert transport.requests == []


@pytest.mark.asyncio
async def test_no_command(transport):
    code, _, err = await invoke(EMPLOYEES, [], transport)
    assert code == EXIT_USAGE
    assert "No command given" in err


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["help", "--help", "-h"])
async def test_help_needs_no_configuration(transport, flag):
    code, out, err = await invoke(SUPPLIERS, [flag], transport)
    assert code == 0
    assert out.decode("utf-8") == SUPPLIERS.help_text
    assert err == ""
    assert transport.requests == []


@pytest.mark.asyncio
async def test_remote_error_body_is_emitted(pos_env):
    error_body = b'{"success":false,"message":"Not found"}'
    transport = RecordingTransport(response=httpx.Response(404, content=error_body))

    code, out, err = await invoke(SUPPLIERS, ["purchases", "?status=9"], transport)

    assert code == EXIT_REMOTE_API
    assert out == error_body
    assert "HTTP 404" in err
    assert "GET /shops/123/purchases" in err


@pytest.mark.asyncio
async def test_connection_error(pos_env):
    transport = RecordingTransport(error=httpx.ConnectError("Name or service not known"))

    code, out, err = await invoke(EMPLOYEES, ["list"], transport)

    assert code == EXIT_TRANSPORT
    assert out == b""
    assert "GET /shops/123/users" in err


@pytest.mark.asyncio
async def test_umbrella_dispatches_to_skill(pos_env, transport):
    stdout = io.BytesIO()
    code = await run_umbrella(
        ["employees", "list"], io.BytesIO(), stdout, io.StringIO(), transport=transport
    )
    assert code == 0
    assert transport.requests[0].url.path == "/api/v1/shops/123/users"


@pytest.mark.asyncio
async def test_umbrella_unknown_skill():
    stderr = io.StringIO()
    code = await run_umbrella(["orders", "list"], io.BytesIO(), io.BytesIO(), stderr)
    assert code == EXIT_USAGE
    assert "Unknown skill: orders" in stderr.getvalue()


@pytest.mark.asyncio
async def test_umbrella_help():
    stdout = io.BytesIO()
    code = await run_umbrella(["help"], io.BytesIO(), stdout, io.StringIO())
    assert code == 0
    assert b"suppliers" in stdout.getvalue()


def test_skill_main_help(capsysbinary, mocker):
    mocker.patch("pos_skills.cli.load_environment")
    code = skill_main("employees", ["help"])
    assert code == 0
    assert capsysbinary.readouterr().out.decode("utf-8") == EMPLOYEES.help_text


@pytest.mark.asyncio
async def test_malformed_query_names_the_query(pos_env, transport):
    code, _, err = await invoke(SUPPLIERS, ["list", "?q=a\x01b"], transport)
    assert code == EXIT_USAGE
    assert "invalid query string" in err
    assert "POS_BASE_URL" not in err
    assert transport.requests == []


@pytest.mark.asyncio
async def test_bad_base_url_is_a_configuration_error(pos_env, transport):
    pos_env.setenv("POS_BASE_URL", "pos.pages.fm/api/v1")
    code, _, err = await invoke(EMPLOYEES, ["list"], transport)
    assert code == EXIT_CONFIG
    assert "POS_BASE_URL" in err
    assert transport.requests == []


def test_dotenv_cannot_confirm_writes(tmp_path, pos_env, mocker):
    (tmp_path / ".env").write_text("CONFIRM_WRITE=YES\n")
    pos_env.chdir(tmp_path)
    transport = RecordingTransport()
    seen = {}

    async def run_with_transport(skill, argv, stdin, stdout, stderr):
        seen["code"] = await run_skill(
            skill, argv, io.BytesIO(b'{"purchase_id":"p1"}'), io.BytesIO(), io.StringIO(), transport=transport
        )
        return seen["code"]

    mocker.patch("pos_skills.cli.run_skill", side_effect=run_with_transport)

    code = skill_main("suppliers", ["split-purchase"])

    assert code == EXIT_WRITE_NOT_CONFIRMED
    assert transport.requests == []
