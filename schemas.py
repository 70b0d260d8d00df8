# schemas.py
"""
Pydantic models for the Budbee API.

Field names follow the wire format (camelCase). Payload models declare the
fields the API requires; response models keep every field optional and
preserve unknown keys, since the API owns the resource shape.
"""

from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CountryCode(StrEnum):
    """ISO 3166-1 alpha-2 country codes served by Budbee."""

    SE = "SE"
    NO = "NO"
    DK = "DK"
    FI = "FI"
    NL = "NL"
    BE = "BE"
    DE = "DE"


DayOfWeek = Literal[
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
]


class Resource(BaseModel):
    """Base for records returned by the API."""

    model_config = ConfigDict(extra="allow")


class Payload(BaseModel):
    """Base for records sent to the API."""

    model_config = ConfigDict(populate_by_name=True)


# Warehouses


class RegisteredAddress(Resource):
    id: Optional[int] = None
    street: Optional[str] = None
    postalCode: Optional[str] = None
    city: Optional[str] = None
    country: Optional[CountryCode | str] = None


class Warehouse(Resource):
    """Merchant-registered collection point."""

    id: Optional[int] = None
    name: Optional[str] = None
    address: Optional[RegisteredAddress] = None
    defaultCollectionPoints: Optional[bool] = None
    doorCode: Optional[str] = None
    fossilFree: Optional[bool] = None
    outsideDoor: Optional[bool] = None
    referencePerson: Optional[str] = None
    telephoneNumber: Optional[str] = None


# Delivery windows


def _from_epoch_millis(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class BetweenDates(Payload):
    """Calendar date range for delivery window lookups."""

    from_: date = Field(alias="from", description="First day, inclusive")
    to: date = Field(description="Last day, inclusive")


class Window(Resource):
    """Time window in Unix epoch milliseconds, UTC."""

    start: Optional[int] = None
    stop: Optional[int] = None

    @property
    def start_at(self) -> Optional[datetime]:
        """Window start as an aware UTC datetime."""
        return _from_epoch_millis(self.start)

    @property
    def stop_at(self) -> Optional[datetime]:
        """Window end as an aware UTC datetime."""
        return _from_epoch_millis(self.stop)


class Interval(Resource):
    """Paired collection and delivery window offered for a postal code."""

    collection: Optional[Window] = None
    delivery: Optional[Window] = None
    collectionPointIds: Optional[list[str]] = None
    fossilFree: Optional[bool] = None


# Orders


class Product(Payload):
    name: str
    reference: str
    quantity: int
    unitPrice: float
    currency: str = Field(description="ISO 4217 currency code")
    taxRate: Optional[float] = None
    discountRate: Optional[float] = None


class Cart(Payload):
    cartId: str
    articles: Optional[list[Product]] = None


class Address(Payload):
    street: str
    street2: Optional[str] = None
    postalCode: str
    city: str
    country: CountryCode | str


class Consumer(Payload):
    name: str
    referencePerson: Optional[str] = None
    telephoneNumber: str
    email: str
    address: Address
    doorCode: Optional[str] = None
    additionalInfo: Optional[str] = None


class Delivery(Consumer):
    socialSecurityNumber: Optional[str] = None
    outsideDoor: Optional[bool] = None


class DeliveryInfoUpdate(Payload):
    """Partial consumer details of an order. The address cannot be changed."""

    name: Optional[str] = None
    referencePerson: Optional[str] = None
    telephoneNumber: Optional[str] = None
    email: Optional[str] = None
    doorCode: Optional[str] = None
    additionalInfo: Optional[str] = None
    socialSecurityNumber: Optional[str] = None
    outsideDoor: Optional[bool] = None


class AdditionalServices(Payload):
    identificationCheckRequired: Optional[bool] = None
    recipientMinimumAge: Optional[int] = None
    recipientMustMatchEndCustomer: Optional[bool] = None
    numberOfMissRetries: Optional[int] = None
    singleIndoor: Optional[bool] = None
    doubleIndoor: Optional[bool] = None
    installation: Optional[int] = None
    returnOfPackaging: Optional[int] = None
    recycling: Optional[int] = None
    swap: Optional[int] = None
    fraudDetection: Optional[bool] = None


class OrderPayload(Payload):
    """Order creation request."""

    collectionId: int = Field(description="Warehouse the parcels leave from")
    cart: Cart
    delivery: Delivery
    requireSignature: bool
    productCodes: Optional[list[str]] = None
    additionalServices: Optional[AdditionalServices] = None


# Order details as returned by the API


class ProductInfo(Resource):
    name: Optional[str] = None
    reference: Optional[str] = None
    quantity: Optional[int] = None
    unitPrice: Optional[float] = None
    currency: Optional[str] = None
    taxRate: Optional[float] = None
    discountRate: Optional[float] = None


class CartInfo(Resource):
    cartId: Optional[str] = None
    articles: Optional[list[ProductInfo]] = None


class AddressInfo(Resource):
    street: Optional[str] = None
    street2: Optional[str] = None
    postalCode: Optional[str] = None
    city: Optional[str] = None
    country: Optional[CountryCode | str] = None


class DeliveryInfo(Resource):
    """Consumer details on an order, pickup or drop-off."""

    name: Optional[str] = None
    referencePerson: Optional[str] = None
    telephoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[AddressInfo] = None
    doorCode: Optional[str] = None
    additionalInfo: Optional[str] = None
    socialSecurityNumber: Optional[str] = None
    outsideDoor: Optional[bool] = None


class AdditionalServicesInfo(Resource):
    identificationCheckRequired: Optional[bool] = None
    recipientMinimumAge: Optional[int] = None
    recipientMustMatchEndCustomer: Optional[bool] = None
    numberOfMissRetries: Optional[int] = None
    singleIndoor: Optional[bool] = None
    doubleIndoor: Optional[bool] = None
    installation: Optional[int] = None
    returnOfPackaging: Optional[int] = None
    recycling: Optional[int] = None
    swap: Optional[int] = None
    fraudDetection: Optional[bool] = None


class Parcel(Resource):
    id: Optional[int] = None
    shipmentId: Optional[str] = None
    packageId: Optional[str] = None
    label: Optional[str] = None


class BaseOrder(Resource):
    id: Optional[str] = None
    token: Optional[str] = None
    createdAt: Optional[int] = Field(default=None, description="Epoch millis, UTC")
    updatedAt: Optional[int] = Field(default=None, description="Epoch millis, UTC")


class Order(BaseOrder):
    """Delivery booking as returned by the API."""

    interval: Optional[Interval] = None
    cart: Optional[CartInfo] = None
    collection: Optional[Warehouse] = None
    delivery: Optional[DeliveryInfo] = None
    signatureRequired: Optional[bool] = None
    parcels: list[Parcel] = Field(default_factory=list)
    additionalServices: Optional[AdditionalServicesInfo] = None
    homeDelivery: Optional[bool] = None
    productCodes: list[str] = Field(default_factory=list)


# Parcels


class Dimensions(Payload):
    width: Optional[float] = Field(default=None, description="cm")
    height: Optional[float] = Field(default=None, description="cm")
    length: Optional[float] = Field(default=None, description="cm")
    weight: Optional[float] = Field(default=None, description="grams")
    volume: Optional[float] = Field(default=None, description="cm3")


class ParcelPayload(Payload):
    shipmentId: Optional[str] = None
    packageId: Optional[str] = None
    dimensions: Optional[Dimensions] = None


class TrackingLink(Resource):
    url: str


# Returns


class PickupPayload(Payload):
    """Standalone return pickup request."""

    cartId: str
    warehouseId: int
    consumer: Consumer
    numberOfParcels: int


class Pickup(BaseOrder):
    interval: Optional[Window] = None
    returnWarehouse: Optional[Warehouse] = None
    consumer: Optional[DeliveryInfo] = None
    parcels: list[Parcel] = Field(default_factory=list)
    additionalServices: Optional[AdditionalServicesInfo] = None
    productCodes: list[str] = Field(default_factory=list)


class DropOffAddress(Payload):
    street: str
    postalCode: str
    city: str
    country: CountryCode | str


class DropOffConsumer(Payload):
    name: str
    phoneNumber: str
    email: str
    address: DropOffAddress


class DropOffPayload(Payload):
    """Standalone box return request."""

    cartId: str
    warehouseId: int
    consumer: DropOffConsumer
    lockerId: Optional[str] = None
    dimensions: Optional[Dimensions] = None


class DropOff(Pickup):
    lockerId: Optional[str] = None


# Lockers


class Coordinate(Resource):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class LockerAddress(Resource):
    street: Optional[str] = None
    street2: Optional[str] = None
    postalCode: Optional[str] = None
    city: Optional[str] = None
    country: Optional[CountryCode | str] = None
    coordinate: Optional[Coordinate] = None


class DayTime(Resource):
    # Days outside DayOfWeek are kept as plain strings.
    day: Optional[DayOfWeek | str] = None
    time: Optional[str] = None


class OpeningHourPeriod(Resource):
    open: Optional[DayTime] = None
    close: Optional[DayTime] = None


class OpeningHours(Resource):
    periods: list[OpeningHourPeriod] = Field(default_factory=list)
    weekdayText: list[str] = Field(default_factory=list)


class Locker(Resource):
    """Automated parcel pickup and drop-off point."""

    id: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    address: Optional[LockerAddress] = None
    estimatedDelivery: Optional[str] = None
    cutoff: Optional[str] = None
    distance: Optional[float] = None
    directions: Optional[str] = None
    openingHours: Optional[OpeningHours] = None


class LockerList(Resource):
    lockers: list[Locker]


class LockersQuery(Payload):
    """Optional filters for locker lookups by postal code."""

    collectionPointId: Optional[int] = None
    language: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    length: Optional[float] = None
    readyToShip: Optional[datetime] = Field(default=None, description="ISO 8601")

    def to_params(self) -> dict[str, str]:
        """
        Render the query as URL parameters.

        Returns:
            Mapping of set fields to their string form.
        """
        data = self.model_dump(mode="json", exclude_none=True)
        return {key: str(value) for key, value in data.items()}
