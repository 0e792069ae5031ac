"""
Portfolio API - Profile Endpoint Tests
=======================================

What:  Singleton profile over HTTP: lazy creation on GET, merge on PUT,
       replace on POST, and never more than one stored profile.
"""

import pytest

from conftest import count_rows
from portfolio_api.models.profile import Profile

EMPTY_PROFILE = {
    "fullName": "",
    "role": "",
    "about": "",
    "currentFocus": "",
    "skills": "",
    "linkedin": "",
    "github": "",
    "email": "",
}


@pytest.mark.asyncio
async def test_get_creates_empty_profile(client):
    response = await client.get("/profile")

    assert response.status_code == 200
    assert response.json() == EMPTY_PROFILE
    assert await count_rows(Profile) == 1


@pytest.mark.asyncio
async def test_repeated_gets_keep_one_profile(client):
    for _ in range(3):
        assert (await client.get("/profile")).status_code == 200
    assert await count_rows(Profile) == 1


@pytest.mark.asyncio
async def test_put_merges_fields(client):
    await client.put("/profile", json={"fullName": "Ada Lovelace", "role": "Engineer"})

    response = await client.put("/profile", json={"currentFocus": "Compilers"})

    assert response.status_code == 200
    body = response.json()
    assert body["fullName"] == "Ada Lovelace"
    assert body["role"] == "Engineer"
    assert body["currentFocus"] == "Compilers"
    assert (await client.get("/profile")).json() == body


@pytest.mark.asyncio
async def test_post_replaces_profile(client):
    await client.put("/profile", json={"fullName": "Ada", "github": "ada"})

    response = await client.post("/profile", json={"fullName": "Grace"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Profile saved"
    assert body["profile"] == {**EMPTY_PROFILE, "fullName": "Grace"}
    assert await count_rows(Profile) == 1


@pytest.mark.asyncio
async def test_snake_case_field_names_accepted(client):
    response = await client.put("/profile", json={"full_name": "Ada"})
    assert response.status_code == 200
    assert response.json()["fullName"] == "Ada"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"nickname": "ada"},
        {"fullName": None},
        {"skills": ["python"]},
    ],
)
async def test_invalid_fields_rejected(client, payload):
    response = await client.put("/profile", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert await count_rows(Profile) == 0
