from addresses.models import Address, Country, State
from platforms.authentication import issue_api_token


def create_geography(code="BR"):
    country = Country.objects.create(name=f"Country {code}", code=code)
    state = State.objects.create(country=country, name=f"State {code}", code="SP")
    return country, state


def address_attributes(country, state, **overrides):
    attributes = {
        "country_id": country.id,
        "state_id": state.id,
        "external_id": "ext-001",
        "address_street": "Rua Augusta",
        "address_number": "1500",
        "address_neighbourhood": "Consolação",
        "address_city": "São Paulo",
        "address_zip_code": "01304-001",
        "address_state": "SP",
        "phone_number": "11999990000",
    }
    attributes.update(overrides)
    return attributes


def create_address(platform, country, state, **overrides):
    attributes = address_attributes(country, state, **overrides)
    return Address.objects.create(platform=platform, **attributes)


def bearer(platform, role, user=None):
    return f"Bearer {issue_api_token(platform, role, user=user)}"
