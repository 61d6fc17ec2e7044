"""In-memory shopper directory for development and testing."""

from checkout.directory.port import AddressSnapshot, ContactSnapshot, ShopperDirectory


class FakeDirectory(ShopperDirectory):
    def __init__(self) -> None:
        self.contacts: dict[str, ContactSnapshot] = {}
        self.addresses: dict[tuple[str, str], AddressSnapshot] = {}

    def register_shopper(self, user_id: str, name: str, email: str, mobile: str | None = None) -> ContactSnapshot:
        contact = ContactSnapshot(user_id=str(user_id), name=name, email=email, mobile=mobile)
        self.contacts[contact.user_id] = contact
        return contact

    def register_address(
        self,
        user_id: str,
        address_id: str,
        street: str,
        city: str,
        state: str | None = None,
        landmark: str | None = None,
        pincode: str | None = None,
    ) -> AddressSnapshot:
        address = AddressSnapshot(
            address_id=str(address_id),
            street=street,
            city=city,
            state=state,
            landmark=landmark,
            pincode=pincode,
        )
        # Addresses are only visible to the shopper who saved them
        self.addresses[(str(user_id), address.address_id)] = address
        return address

    def get_contact(self, user_id: str) -> ContactSnapshot | None:
        return self.contacts.get(str(user_id))

    def get_address(self, user_id: str, address_id: str) -> AddressSnapshot | None:
        return self.addresses.get((str(user_id), str(address_id)))
