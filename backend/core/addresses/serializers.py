from rest_framework import serializers

from addresses.models import Address


class AddressSerializer(serializers.ModelSerializer):
    platform_id = serializers.IntegerField(read_only=True)
    country_id = serializers.IntegerField(read_only=True)
    state_id = serializers.IntegerField(read_only=True)
    country_name = serializers.CharField(source="country.name", read_only=True)
    state_name = serializers.CharField(source="state.name", read_only=True)

    class Meta:
        model = Address
        fields = (
            "id",
            "platform_id",
            "country_id",
            "country_name",
            "state_id",
            "state_name",
            "external_id",
            "address_street",
            "address_number",
            "address_complement",
            "address_neighbourhood",
            "address_city",
            "address_zip_code",
            "address_state",
            "phone_number",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class RelationIdField(serializers.IntegerField):
    """Integer id where an empty string means "no relation"."""

    def validate_empty_values(self, data):
        if data == "":
            data = None
        return super().validate_empty_values(data)


def _text_field():
    return serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class AddressWriteSerializer(serializers.Serializer):
    """Type-casts the allow-listed write attributes.

    Lengths and required relations are left to the model's own validation, so
    the error keys stay the ones `full_clean` reports.
    """

    platform_id = RelationIdField(required=False, allow_null=True)
    country_id = RelationIdField(required=False, allow_null=True)
    state_id = RelationIdField(required=False, allow_null=True)
    external_id = _text_field()
    address_street = _text_field()
    address_number = _text_field()
    address_complement = _text_field()
    address_neighbourhood = _text_field()
    address_city = _text_field()
    address_zip_code = _text_field()
    address_state = _text_field()
    phone_number = _text_field()
