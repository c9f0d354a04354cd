"""
Tests de la entidad ProfileRecord (parseo de payloads del wire).
"""
from profile_sync.domain.entities.profile import ProfileRecord


def test_from_payload_normalizes_email_and_drops_remote_id():
    record = ProfileRecord.from_payload({"id": 77, "email": "  Jane.Doe@Example.COM ", "first_name": "Jane"})
    assert record.email == "jane.doe@example.com"
    assert record.user_id is None
    assert record.first_name == "Jane"


def test_alias_maps_to_company_role():
    record = ProfileRecord.from_payload({"email": "a@b.com", "select_person_type": "broker_associate"})
    assert record.company_role == "broker_associate"


def test_canonical_key_wins_over_alias():
    record = ProfileRecord.from_payload({
        "email": "a@b.com",
        "company_role": "leadership",
        "select_person_type": "staff",
    })
    assert record.company_role == "leadership"


def test_unknown_keys_go_to_extra():
    record = ProfileRecord.from_payload({"email": "a@b.com", "favorite_color": "blue"})
    assert record.extra == {"favorite_color": "blue"}
    assert "favorite_color" not in record.supplied_attributes()


def test_headshot_coerced_and_empty_role_dropped():
    record = ProfileRecord.from_payload({"email": "a@b.com", "headshot_id": "42", "company_role": ""})
    assert record.headshot_id == 42
    assert record.company_role is None


def test_supplied_attributes_only_include_present_values():
    record = ProfileRecord.from_payload({"email": "a@b.com", "phone_number": "555", "first_name": "A"})
    assert record.supplied_attributes() == {"phone_number": "555"}


def test_to_payload_omits_absent_values():
    record = ProfileRecord(email="a@b.com", user_id=3, job_title="Broker", specialties=["VA"])
    assert record.to_payload() == {
        "email": "a@b.com",
        "id": 3,
        "job_title": "Broker",
        "specialties": ["VA"],
    }


def test_computed_display_name():
    assert ProfileRecord(email="a@b.com", first_name="Ana", last_name="Ruiz").computed_display_name() == "Ana Ruiz"
    assert ProfileRecord(email="a@b.com", display_name="AR").computed_display_name() == "AR"
    assert ProfileRecord(email="a@b.com").computed_display_name() == ""


def test_to_payload_mirrors_company_role_alias():
    record = ProfileRecord(email="a@b.com", company_role="staff")
    payload = record.to_payload()
    assert payload["company_role"] == "staff"
    assert payload["select_person_type"] == "staff"
    assert ProfileRecord.from_payload(payload).company_role == "staff"
