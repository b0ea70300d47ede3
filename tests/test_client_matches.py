import pytest

from kupo_client.kupo_api import DecodeError, Match, StatusError

UNSPENT = {
    "transaction_index": 0,
    "transaction_id": "3b1f4e2d5c6a7b8c9d0e1f2a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c5d6e",
    "output_index": 0,
    "address": "addr_test1vpu5vlrf4xkxv2qpwngf6cjhtw542ayty80v8dyr49rf5eg57c2qv",
    "value": {"coins": 1500000, "assets": {}},
    "datum_hash": None,
    "datum_type": None,
    "script_hash": "4fc6bb0c93780ad706425d9f7dc1d3c5e3ddbf29ba8486dce904a5fc",
    "created_at": {
        "slot_no": 16588800,
        "header_hash": "e0a8b9c7d6f5e4a3b2c1d0e9f8a7b6c5d4e3f2a1b0c9d8e7f6a5b4c3d2e1f0a9",
    },
    "spent_at": None,
}


@pytest.mark.asyncio
async def test_get_all_matches_decodes_records(fake_kupo, kupo_client):
    spent = {**UNSPENT, "output_index": 1, "spent_at": {"slot_no": 16588900, "header_hash": "ab" * 32}}
    fake_kupo.reply("/matches", [UNSPENT, spent])

    matches = await kupo_client.get_all_matches()

    assert [match.output_index for match in matches] == [0, 1]
    assert all(isinstance(match, Match) for match in matches)
    assert matches[0].script_hash == UNSPENT["script_hash"]
    assert not matches[0].is_spent
    assert matches[1].is_spent
    assert matches[1].spent_at.slot_no == 16588900
    assert fake_kupo.requests[0]["accept"] == "application/json"


@pytest.mark.asyncio
async def test_get_matches_puts_pattern_in_path_verbatim(fake_kupo, kupo_client):
    pattern = "addr_vk1x7da0l25j04my8sej5ntrgdn38wmshxhplxdfjskn07ufavsgtkqn5hljl/*"
    fake_kupo.reply(f"/matches/{pattern}", [UNSPENT])

    matches = await kupo_client.get_matches(pattern)

    assert len(matches) == 1
    assert matches[0].value.coins == 1500000
    assert fake_kupo.requests[0]["path"] == f"/matches/{pattern}"


@pytest.mark.asyncio
async def test_get_matches_empty_result(fake_kupo, kupo_client):
    fake_kupo.reply("/matches/*/*", [])
    assert await kupo_client.get_matches("*/*") == []


@pytest.mark.asyncio
async def test_get_matches_unexpected_status(fake_kupo, kupo_client):
    fake_kupo.reply("/matches/*", {"hint": "bad pattern"}, status_code=400)

    with pytest.raises(StatusError) as excinfo:
        await kupo_client.get_matches("*")

    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "failed to get matches: status code 400"


@pytest.mark.asyncio
async def test_get_all_matches_not_modified_is_an_error(fake_kupo, kupo_client):
    fake_kupo.reply("/matches", "", status_code=304)

    with pytest.raises(StatusError) as excinfo:
        await kupo_client.get_all_matches()

    assert excinfo.value.status_code == 304


@pytest.mark.asyncio
async def test_get_all_matches_invalid_json(fake_kupo, kupo_client):
    fake_kupo.reply("/matches", "invalid json")

    with pytest.raises(DecodeError) as excinfo:
        await kupo_client.get_all_matches()

    message = str(excinfo.value)
    assert message.startswith("failed to unmarshal matches: ")
    assert "line 1 column 1" in message


@pytest.mark.asyncio
async def test_get_all_matches_wrong_shape(fake_kupo, kupo_client):
    fake_kupo.reply("/matches", [{**UNSPENT, "created_at": "yesterday"}])

    with pytest.raises(DecodeError) as excinfo:
        await kupo_client.get_all_matches()

    assert str(excinfo.value) == (
        "failed to unmarshal matches: matches[0].created_at: expected object, got string"
    )


@pytest.mark.asyncio
async def test_null_body_yields_no_matches(fake_kupo, kupo_client):
    fake_kupo.reply("/matches", "null")
    fake_kupo.reply("/matches/*", "null")

    assert await kupo_client.get_all_matches() == []
    assert await kupo_client.get_matches("*") == []
