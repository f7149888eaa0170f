"""Comprehensive tests for the admin feature.
Covers: admin auth, donor moderation, request overview, statistics.
"""

import pytest
from fastapi import status

from src.config.settings import settings
from src.features.admin.exceptions import IncorrectAdminPassword
from src.features.admin.service import AdminService
from src.features.auth.jwt_utils import create_access_token, decode_token
from src.features.donor.models import BloodGroup, DonorStatus
from src.features.donor.service import DonorService
from src.features.requests.models import RequestStatus

API = settings.api_prefix


# AdminService


class TestAdminAccounts:
    async def test_ensure_default_admin_is_idempotent(self, session):
        assert await AdminService.ensure_default_admin(session, "admin", "admin123") is True
        assert await AdminService.ensure_default_admin(session, "admin", "other") is False

        admin = await AdminService.get_admin_by_username(session, "admin")
        assert admin.verify_password("admin123")

    async def test_authenticate(self, session, make_admin):
        await make_admin(username="boss", password="bosspass")

        assert await AdminService.authenticate_admin(session, "boss", "bosspass") is not None
        assert await AdminService.authenticate_admin(session, "boss", "wrong") is None
        assert await AdminService.authenticate_admin(session, "nobody", "bosspass") is None

    async def test_change_password(self, make_admin):
        admin = await make_admin(password="oldpass1")

        with pytest.raises(IncorrectAdminPassword):
            await AdminService.change_password(admin, "wrong", "newpass1")

        await AdminService.change_password(admin, "oldpass1", "newpass1")
        assert admin.verify_password("newpass1")


class TestAdminAuthEndpoints:
    async def test_login_and_use_token(self, client, make_admin):
        admin = await make_admin(username="boss", password="bosspass")

        response = await client.post(f"{API}/admin/login", json={"username": "boss", "password": "bosspass"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["username"] == "boss"
        assert body["token_type"] == "bearer"
        payload = decode_token(body["access_token"])
        assert payload["type"] == "admin"
        assert payload["sub"] == str(admin.id)

        stats = await client.get(f"{API}/admin/stats", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert stats.status_code == status.HTTP_200_OK

    async def test_login_invalid(self, client, make_admin):
        await make_admin(username="boss", password="bosspass")

        response = await client.post(f"{API}/admin/login", json={"username": "boss", "password": "nope"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid admin credentials"

    async def test_donor_token_refused(self, client, make_donor):
        donor = await make_donor()
        token = create_access_token({"sub": str(donor.id)})

        response = await client.get(f"{API}/admin/donors", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_missing_token(self, client):
        response = await client.get(f"{API}/admin/stats")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_change_password(self, admin_client):
        client, admin = admin_client

        response = await client.post(
            f"{API}/admin/change-password", json={"current_password": "adminpass", "new_password": "rotated1"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert admin.verify_password("rotated1")


# Donor moderation


class TestDonorList:
    async def test_pagination(self, admin_client, make_donor):
        client, _ = admin_client
        for _ in range(5):
            await make_donor()

        response = await client.get(f"{API}/admin/donors", params={"page": 2, "page_size": 2})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 5
        assert body["page"] == 2
        assert body["page_size"] == 2
        assert len(body["items"]) == 2

    async def test_query_matches_name_email_or_phone(self, admin_client, make_donor):
        client, _ = admin_client
        by_name = await make_donor(name="Karim Hossain")
        by_email = await make_donor(email="karim.work@example.com")
        by_phone = await make_donor(phone_number="01555123456")
        await make_donor(name="Someone Else")

        response = await client.get(f"{API}/admin/donors", params={"query": "KARIM"})
        assert {item["id"] for item in response.json()["items"]} == {by_name.id, by_email.id}

        response = await client.get(f"{API}/admin/donors", params={"query": "555123"})
        assert [item["id"] for item in response.json()["items"]] == [by_phone.id]

    async def test_exact_filters(self, admin_client, make_donor):
        client, _ = admin_client
        target = await make_donor(blood_group=BloodGroup.B_NEGATIVE, status=DonorStatus.SUSPENDED, location="Barishal")
        await make_donor(blood_group=BloodGroup.B_NEGATIVE)
        await make_donor(status=DonorStatus.SUSPENDED)

        response = await client.get(
            f"{API}/admin/donors", params={"blood_group": "B-", "status": "suspended", "location": "bari"}
        )

        assert [item["id"] for item in response.json()["items"]] == [target.id]

    async def test_page_size_limit(self, admin_client):
        client, _ = admin_client

        response = await client.get(f"{API}/admin/donors", params={"page_size": 500})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestDonorModeration:
    async def test_get_donor_detail(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor(days_since_donation=85)

        response = await client.get(f"{API}/admin/donors/{donor.id}")

        body = response.json()
        assert body["id"] == donor.id
        assert body["eligible"] is False
        assert body["days_until_eligible"] == 5

    async def test_get_unknown_donor(self, admin_client):
        client, _ = admin_client

        response = await client.get(f"{API}/admin/donors/999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_partial_update(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor(name="Before", location="Comilla")

        response = await client.patch(f"{API}/admin/donors/{donor.id}", json={"name": "After", "blood_group": "AB-"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["name"] == "After"
        assert body["blood_group"] == "AB-"
        assert body["location"] == "Comilla"

    async def test_update_duplicate_email(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor()
        other = await make_donor()

        response = await client.patch(f"{API}/admin/donors/{donor.id}", json={"email": other.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Email already exists"

    async def test_update_invalid_phone(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor()

        response = await client.patch(f"{API}/admin/donors/{donor.id}", json={"phone_number": "123"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_suspend_and_reactivate(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor()

        response = await client.patch(
            f"{API}/admin/donors/{donor.id}/status", json={"status": "suspended", "reason": "Fake profile"}
        )
        body = response.json()
        assert body["status"] == "suspended"
        assert body["verification_note"] == "Fake profile"

        response = await client.patch(f"{API}/admin/donors/{donor.id}/status", json={"status": "active"})
        body = response.json()
        assert body["status"] == "active"
        assert body["verification_note"] == "Fake profile"

    async def test_verify(self, admin_client, make_donor):
        client, _ = admin_client
        donor = await make_donor()

        response = await client.patch(
            f"{API}/admin/donors/{donor.id}/verify", json={"verified": True, "note": "ID checked"}
        )

        body = response.json()
        assert body["verified"] is True
        assert body["verification_note"] == "ID checked"

    async def test_delete_removes_requests(self, admin_client, session, make_donor, make_request):
        client, _ = admin_client
        donor = await make_donor()
        other = await make_donor()
        await make_request(donor, other)
        await make_request(other, donor)

        response = await client.delete(f"{API}/admin/donors/{donor.id}")

        assert response.status_code == status.HTTP_200_OK
        assert await DonorService.get_donor(session, donor.id) is None
        assert (await client.get(f"{API}/admin/requests")).json() == []

    async def test_delete_unknown_donor(self, admin_client):
        client, _ = admin_client

        response = await client.delete(f"{API}/admin/donors/999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestOverview:
    async def test_requests_newest_first(self, admin_client, make_donor, make_request):
        client, _ = admin_client
        a = await make_donor()
        b = await make_donor()
        first = await make_request(a, b)
        second = await make_request(b, a)

        response = await client.get(f"{API}/admin/requests")

        assert [item["id"] for item in response.json()] == [second.id, first.id]

    async def test_stats(self, admin_client, make_donor, make_request):
        client, _ = admin_client
        a = await make_donor(blood_group=BloodGroup.O_POSITIVE)
        b = await make_donor(blood_group=BloodGroup.O_POSITIVE)
        c = await make_donor(blood_group=BloodGroup.A_NEGATIVE)
        await make_request(a, b)
        await make_request(a, c)
        await make_request(b, c, status=RequestStatus.COMPLETED, rating=5)

        response = await client.get(f"{API}/admin/stats")

        assert response.json() == {
            "active_requests": 2,
            "total_donors": 3,
            "donors_by_blood_group": {"O+": 2, "A-": 1},
        }
