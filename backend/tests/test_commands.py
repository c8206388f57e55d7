import pytest

from jobboard.commands import (
    ChangeEmail,
    CreateListing,
    GetProfile,
    Login,
    SignUp,
    parse_command,
)
from jobboard.errors import ValidationError

ALL_COMMANDS = [
    'login', 'sign_up', 'change_email', 'change_password', 'change_age',
    'change_name', 'change_location', 'get_location', 'search_jobs',
    'get_messages', 'send_message', 'create_listing', 'get_profile',
    'get_my_listings', 'delete_listing',
]


@pytest.mark.parametrize('cmd', ALL_COMMANDS)
def test_every_command_parses_without_fields(cmd):
    assert parse_command({'cmd': cmd}).cmd == cmd


def test_parse_known_command_ignores_unknown_fields():
    command = parse_command({'cmd': 'change_email', 'email': 'a@b.c', 'password': 'x',
                             'new_email': 'd@e.f', 'extra': 1})
    assert command == ChangeEmail(cmd='change_email', email='a@b.c', password='x', new_email='d@e.f')
    assert command.reports_success
    assert not command.needs_owner


def test_owner_is_resolved_only_for_plain_credentialed_commands():
    assert parse_command({'cmd': 'get_profile'}).needs_owner
    assert isinstance(parse_command({'cmd': 'get_profile'}), GetProfile)
    assert not parse_command({'cmd': 'login'}).needs_owner
    assert not parse_command({'cmd': 'sign_up'}).needs_owner


def test_login_prefers_username():
    assert parse_command({'cmd': 'login', 'username': 'u', 'email': 'e', 'password': 'p'}) == \
        Login(cmd='login', username='u', password='p')
    assert parse_command({'cmd': 'login', 'email': 'e', 'password': 'p'}).username == 'e'


def test_sign_up_missing_fields_treats_falsy_as_missing():
    command = parse_command({'cmd': 'sign_up', 'email': 'a@b.c', 'password': '', 'first_name': 'A'})
    assert isinstance(command, SignUp)
    assert command.missing_fields() == ['password', 'last_name', 'location']


def test_create_listing_fields_exclude_credentials_and_images():
    command = parse_command({'cmd': 'create_listing', 'email': 'a', 'password': 'b',
                             'listing_title': 'T', 'payinfo': 12, 'pic': ['x']})
    assert isinstance(command, CreateListing)
    fields = command.listing_fields()
    assert fields['listing_title'] == 'T'
    assert fields['payinfo'] == 12
    assert not {'cmd', 'email', 'password', 'pic'} & set(fields)
    assert command.pic == ['x']


@pytest.mark.parametrize('payload', [{}, {'cmd': 'nope'}, {'cmd': 5}, [], 'login', None])
def test_unsupported_commands(payload):
    with pytest.raises(ValidationError) as exc:
        parse_command(payload)
    assert exc.value.to_dict() == {'error': 'Invalid or unsupported command'}


@pytest.mark.parametrize('payload,field', [
    ({'cmd': 'sign_up', 'email': 123}, 'email'),
    ({'cmd': 'change_email', 'new_email': ['a@b.c']}, 'new_email'),
    ({'cmd': 'send_message', 'to': {'email': 'x'}}, 'to'),
    ({'cmd': 'login', 'password': 12345678}, 'password'),
    ({'cmd': 'create_listing', 'pic': 'data:image/png;base64,AAAA'}, 'pic'),
])
def test_wrongly_typed_fields_are_rejected(payload, field):
    with pytest.raises(ValidationError) as exc:
        parse_command(payload)
    assert exc.value.status_code == 400
    assert exc.value.to_dict() == {'error': 'Invalid or unsupported command', 'details': [field]}
