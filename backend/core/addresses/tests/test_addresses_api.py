from django.test import TestCase
from rest_framework.test import APIClient

from addresses.models import Address
from addresses.tests import fixtures
from platforms.models import Platform, PlatformUser
from tenancy.callers import CallerKind

LIST_URL = "/api/v1/addresses/"


def detail_url(address_id):
    return f"/api/v1/addresses/{address_id}/"


class AddressesAPITestCase(TestCase):
    def setUp(self):
        self.platform = Platform.objects.create(name="Acme")
        self.another_platform = Platform.objects.create(name="Globex")
        self.country, self.state = fixtures.create_geography()
        self.address = fixtures.create_address(self.platform, self.country, self.state)
        self.owner = PlatformUser.objects.create(
            platform=self.platform,
            email="owner@acme.test",
            address=self.address,
        )
        self.not_owner = PlatformUser.objects.create(
            platform=self.platform,
            email="not-owner@acme.test",
        )
        self.another_platform_user = PlatformUser.objects.create(
            platform=self.another_platform,
            email="user@globex.test",
        )
        self.client = APIClient()

    def authenticate_as_platform(self, platform=None):
        self.client.credentials(
            HTTP_AUTHORIZATION=fixtures.bearer(platform or self.platform, CallerKind.PLATFORM)
        )

    def authenticate_as_user(self, user):
        self.client.credentials(
            HTTP_AUTHORIZATION=fixtures.bearer(user.platform, CallerKind.SCOPED, user=user)
        )

    def address_params(self, **overrides):
        return fixtures.address_attributes(self.country, self.state, **overrides)


class CreateAddressAPITests(AddressesAPITestCase):
    def post(self, params):
        return self.client.post(LIST_URL, {"address": params}, format="json")

    def test_anonymous_is_denied(self):
        response = self.post(self.address_params())
        self.assertEqual(response.status_code, 403)

    def test_invalid_token_is_denied(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        response = self.post(self.address_params())
        self.assertEqual(response.status_code, 403)

    def test_platform_user_creates_address(self):
        self.authenticate_as_platform()
        response = self.post(self.address_params(platform_id=self.platform.id))
        self.assertEqual(response.status_code, 200)
        created = Address.objects.get(pk=response.json()["address_id"])
        self.assertEqual(created.platform_id, self.platform.id)

    def test_scoped_user_cannot_create_in_another_platform(self):
        self.authenticate_as_user(self.not_owner)
        before = Address.objects.count()
        response = self.post(self.address_params(platform_id=self.another_platform.id))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(Address.objects.count(), before)

    def test_scoped_user_with_missing_attributes_gets_validation_errors(self):
        self.authenticate_as_user(self.owner)
        response = self.post({"phone_number": "9999999999"})
        self.assertEqual(response.status_code, 400)
        payload = response.json()
        self.assertEqual(payload["country"], ["can't be blank"])
        self.assertEqual(payload["state"], ["can't be blank"])

    def test_scoped_user_with_valid_attributes_creates_address(self):
        self.authenticate_as_user(self.owner)
        response = self.post(self.address_params())
        self.assertEqual(response.status_code, 200)
        self.assertTrue(Address.objects.filter(pk=response.json()["address_id"]).exists())

    def test_fields_outside_allow_list_are_ignored(self):
        self.authenticate_as_platform()
        params = self.address_params(id=987654, created_at="2001-01-01T00:00:00Z", is_verified=True)
        response = self.post(params)
        self.assertEqual(response.status_code, 200)
        self.assertNotEqual(response.json()["address_id"], 987654)
        self.assertFalse(Address.objects.filter(pk=987654).exists())

    def test_missing_address_root_is_bad_request(self):
        self.authenticate_as_platform()
        response = self.client.post(LIST_URL, {"phone_number": "1"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"address": ["This field is required."]})

    def test_empty_address_object_is_bad_request(self):
        self.authenticate_as_platform()
        before = Address.objects.count()
        response = self.post({})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"address": ["This field is required."]})
        self.assertEqual(Address.objects.count(), before)


class UpdateAddressAPITests(AddressesAPITestCase):
    change = {"phone_number": "111111", "address_street": "changed street"}

    def put(self, address_id, params):
        return self.client.put(detail_url(address_id), {"address": params}, format="json")

    def test_anonymous_is_denied(self):
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 403)

    def test_platform_user_from_another_platform_gets_not_found(self):
        self.authenticate_as_platform(self.another_platform)
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 404)

    def test_platform_user_from_current_platform_updates(self):
        self.authenticate_as_platform()
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 200)
        changed = Address.objects.get(pk=response.json()["address_id"])
        self.assertEqual(changed.address_street, "changed street")
        self.assertEqual(changed.phone_number, "111111")

    def test_scoped_user_not_owner_is_forbidden(self):
        self.authenticate_as_user(self.not_owner)
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 403)
        self.address.refresh_from_db()
        self.assertEqual(self.address.address_street, "Rua Augusta")

    def test_scoped_user_from_another_platform_gets_not_found(self):
        self.authenticate_as_user(self.another_platform_user)
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 404)

    def test_unknown_id_gets_not_found(self):
        self.authenticate_as_platform()
        response = self.put(987654, self.change)
        self.assertEqual(response.status_code, 404)

    def test_owner_with_missing_attributes_gets_validation_errors(self):
        self.authenticate_as_user(self.owner)
        response = self.put(self.address.id, {"state_id": None})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["state"], ["can't be blank"])

    def test_owner_with_empty_address_object_gets_bad_request(self):
        self.authenticate_as_user(self.owner)
        updated_at = self.address.updated_at
        response = self.put(self.address.id, {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"address": ["This field is required."]})
        self.address.refresh_from_db()
        self.assertEqual(self.address.updated_at, updated_at)
        self.assertEqual(self.address.address_street, "Rua Augusta")

    def test_owner_with_non_numeric_relation_id_gets_validation_errors(self):
        self.authenticate_as_user(self.owner)
        response = self.put(self.address.id, {"country_id": "abc", "address_street": "x"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"country_id": ["A valid integer is required."]})
        self.address.refresh_from_db()
        self.assertEqual(self.address.address_street, "Rua Augusta")

    def test_owner_updates_address(self):
        self.authenticate_as_user(self.owner)
        response = self.put(self.address.id, self.change)
        self.assertEqual(response.status_code, 200)
        changed = Address.objects.get(pk=response.json()["address_id"])
        self.assertEqual(changed.address_street, "changed street")
        self.assertEqual(changed.phone_number, "111111")

    def test_owner_patch_behaves_like_put(self):
        self.authenticate_as_user(self.owner)
        response = self.client.patch(
            detail_url(self.address.id),
            {"address": {"address_city": "Campinas"}},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.address.refresh_from_db()
        self.assertEqual(self.address.address_city, "Campinas")


class DestroyAddressAPITests(AddressesAPITestCase):
    def test_anonymous_is_denied(self):
        response = self.client.delete(detail_url(self.address.id))
        self.assertEqual(response.status_code, 403)

    def test_platform_user_from_another_platform_gets_not_found(self):
        self.authenticate_as_platform(self.another_platform)
        response = self.client.delete(detail_url(self.address.id))
        self.assertEqual(response.status_code, 404)
        self.assertTrue(Address.objects.filter(pk=self.address.id).exists())

    def test_platform_user_from_current_platform_deletes(self):
        self.authenticate_as_platform()
        response = self.client.delete(detail_url(self.address.id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"address_id": self.address.id, "deleted": "OK"})
        self.assertFalse(Address.objects.filter(pk=self.address.id).exists())

    def test_scoped_user_not_owner_is_forbidden(self):
        self.authenticate_as_user(self.not_owner)
        response = self.client.delete(detail_url(self.address.id))
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Address.objects.filter(pk=self.address.id).exists())

    def test_owner_deletes_address_and_it_is_gone(self):
        self.authenticate_as_user(self.owner)
        response = self.client.delete(detail_url(self.address.id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deleted"], "OK")

        followup = self.client.get(detail_url(self.address.id))
        self.assertEqual(followup.status_code, 404)


class ReadAddressAPITests(AddressesAPITestCase):
    def setUp(self):
        super().setUp()
        self.second_address = fixtures.create_address(
            self.platform, self.country, self.state, external_id="ext-002"
        )
        self.foreign_address = fixtures.create_address(
            self.another_platform, self.country, self.state, external_id="ext-003"
        )

    def test_platform_user_lists_only_its_tenant(self):
        self.authenticate_as_platform()
        response = self.client.get(LIST_URL)
        self.assertEqual(response.status_code, 200)
        ids = {item["id"] for item in response.json()}
        self.assertEqual(ids, {self.address.id, self.second_address.id})

    def test_scoped_user_lists_whole_tenant(self):
        self.authenticate_as_user(self.not_owner)
        response = self.client.get(LIST_URL)
        ids = {item["id"] for item in response.json()}
        self.assertEqual(ids, {self.address.id, self.second_address.id})

    def test_retrieve_in_scope(self):
        self.authenticate_as_user(self.not_owner)
        response = self.client.get(detail_url(self.address.id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["platform_id"], self.platform.id)
        self.assertEqual(response.json()["country_name"], self.country.name)

    def test_retrieve_out_of_scope_is_not_found(self):
        self.authenticate_as_user(self.not_owner)
        response = self.client.get(detail_url(self.foreign_address.id))
        self.assertEqual(response.status_code, 404)
