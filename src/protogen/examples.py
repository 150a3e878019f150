"""
Example models used by the demo script and the tests.

    Credentials  - plain and secure text
    Prefs        - titled and untitled sections
    Empty        - no visible members
    Profile      - every type category, including a nested Address
"""
from protogen.model import AccessLevel, MemberAttribute, MemberSpec, ModelSpec

VISIBLE = MemberAttribute.VISIBLE
MODIFIABLE = MemberAttribute.MODIFIABLE
SECURE = MemberAttribute.SECURE
SECTION = MemberAttribute.SECTION


def build_credentials() -> ModelSpec:
    return ModelSpec(
        name="Credentials",
        access_level=AccessLevel.PUBLIC,
        members=(
            MemberSpec(name="username", type_name="String", attributes=VISIBLE | MODIFIABLE),
            MemberSpec(name="password", type_name="String", attributes=VISIBLE | MODIFIABLE | SECURE),
        ),
    )


def build_prefs() -> ModelSpec:
    return ModelSpec(
        name="Prefs",
        members=(
            MemberSpec(name="a", type_name="Bool", attributes=VISIBLE | MODIFIABLE | SECTION,
                       section_title="General", initializer="true"),
            MemberSpec(name="b", type_name="String", attributes=VISIBLE | MODIFIABLE,
                       initializer='"guest"'),
            MemberSpec(name="c", type_name="Int", attributes=VISIBLE | MODIFIABLE | SECTION),
            MemberSpec(name="d", type_name="Double", attributes=VISIBLE),
        ),
    )


def build_empty() -> ModelSpec:
    return ModelSpec(
        name="Empty",
        members=(
            MemberSpec(name="secret", type_name="String", attributes=MODIFIABLE),
        ),
    )


def build_address() -> ModelSpec:
    return ModelSpec(
        name="Address",
        access_level=AccessLevel.PUBLIC,
        members=(
            MemberSpec(name="street", type_name="String"),
            MemberSpec(name="city", type_name="String"),
        ),
    )


def build_profile() -> ModelSpec:
    return ModelSpec(
        name="Profile",
        access_level=AccessLevel.PUBLIC,
        members=(
            MemberSpec(name="name", type_name="String", attributes=VISIBLE | MODIFIABLE | SECTION,
                       section_title="Identity"),
            MemberSpec(name="pin", type_name="String", attributes=VISIBLE | MODIFIABLE | SECURE),
            MemberSpec(name="birthday", type_name="Date", attributes=VISIBLE),
            MemberSpec(name="age", type_name="UInt8", attributes=VISIBLE | MODIFIABLE),
            MemberSpec(name="verified", type_name="Bool", attributes=VISIBLE),
            MemberSpec(name="address", type_name="Address", attributes=VISIBLE | MODIFIABLE | SECTION,
                       section_title="Contact"),
            MemberSpec(name="token", type_name="String", attributes=MODIFIABLE),
        ),
    )


EXAMPLE_SOURCE = '''\
@Prototype(kinds: .form, .view, style: .labeled)
public struct Address {
    var street: String
    var city: String
}

@Prototype(kinds: .form, .settings, .view)
public struct Profile {
    @Section("Identity")
    var name: String = "Anonymous"
    @Secure var pin: String = ""
    let birthday: Date
    var age: UInt8 = 0
    let verified: Bool
    @Section("Contact") var address: Address = Address()
    private var token: String = ""
}
'''
