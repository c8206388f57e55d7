# Request commands: one pydantic model per `cmd` value

from typing import Annotated, Any, ClassVar, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

UNSUPPORTED = 'Invalid or unsupported command'


class Command(BaseModel):
    """Fields a command needs are optional here; handlers check presence in
    the order the responses require (credentials before required fields)."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    # The dispatcher resolves the caller's user index before the handler runs
    needs_owner: ClassVar[bool] = True
    # Profile updates answer failures with {"success": false, ...}
    reports_success: ClassVar[bool] = False


class Credentialed(Command):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(Credentialed):
    # CredentialStore.change_* check the credentials themselves
    needs_owner: ClassVar[bool] = False
    reports_success: ClassVar[bool] = True


class Login(Command):
    needs_owner: ClassVar[bool] = False
    cmd: Literal['login']
    username: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def username_from_email(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get('username') is None and 'email' in data:
            return {**data, 'username': data['email']}
        return data


class SignUp(Command):
    needs_owner: ClassVar[bool] = False
    required: ClassVar[tuple] = ('password', 'email', 'first_name', 'last_name', 'location')
    cmd: Literal['sign_up']
    password: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    location: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [name for name in self.required if not getattr(self, name)]


class ChangeEmail(ProfileUpdate):
    cmd: Literal['change_email']
    new_email: Optional[str] = None


class ChangePassword(ProfileUpdate):
    cmd: Literal['change_password']
    new_password: Optional[str] = None


class ChangeAge(ProfileUpdate):
    cmd: Literal['change_age']
    age: Any = None


class ChangeName(ProfileUpdate):
    cmd: Literal['change_name']
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ChangeLocation(ProfileUpdate):
    cmd: Literal['change_location']
    location: Optional[str] = None


class GetLocation(Credentialed):
    cmd: Literal['get_location']


class SearchJobs(Credentialed):
    cmd: Literal['search_jobs']
    job_search: Optional[str] = None


class GetMessages(Credentialed):
    cmd: Literal['get_messages']
    other_user: Optional[str] = None


class SendMessage(Credentialed):
    cmd: Literal['send_message']
    to: Optional[str] = None
    message: Optional[str] = None


class CreateListing(Credentialed):
    cmd: Literal['create_listing']
    # Caller-supplied and stored as given
    listing_title: Any = None
    description: Any = None
    age: Any = None
    age_suggested: Any = None
    age_required: Any = None
    city: Any = None
    date: Any = None
    payinfo: Any = None
    pic: Optional[List[Any]] = None

    def listing_fields(self) -> dict:
        return self.model_dump(exclude={'cmd', 'email', 'password', 'pic'})


class GetProfile(Credentialed):
    cmd: Literal['get_profile']


class GetMyListings(Credentialed):
    cmd: Literal['get_my_listings']


class DeleteListing(Credentialed):
    cmd: Literal['delete_listing']
    listing_id: Optional[str] = None


AnyCommand = Annotated[
    Union[
        Login,
        SignUp,
        ChangeEmail,
        ChangePassword,
        ChangeAge,
        ChangeName,
        ChangeLocation,
        GetLocation,
        SearchJobs,
        GetMessages,
        SendMessage,
        CreateListing,
        GetProfile,
        GetMyListings,
        DeleteListing,
    ],
    Field(discriminator='cmd'),
]

_commands = TypeAdapter(AnyCommand)


def parse_command(payload) -> Command:
    """Build the command variant named by ``payload["cmd"]``.

    An unknown or missing ``cmd`` is a plain unsupported-command error; a
    known command with wrongly typed fields also lists the offending fields.
    """
    try:
        return _commands.validate_python(payload)
    except PydanticValidationError as e:
        fields = sorted({str(err['loc'][1]) for err in e.errors() if len(err['loc']) > 1})
        if fields:
            raise ValidationError(UNSUPPORTED, details=fields) from e
        raise ValidationError(UNSUPPORTED) from e
