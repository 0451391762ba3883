"""
Firestore source over the Firestore REST documents API.

Used as the backup tier. Collections `articles` and `providers` hold one
document per record; bookings are written to `bookings` together with the
submitting user's id.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from medassist.fetching.sources.base import MalformedResponse, RemoteSource
from medassist.fetching.sources.registry import registry
from medassist.schemas.records import Article, BookingConfirmation, BookingRequest, Provider

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
GUEST_USER_ID = "guest"


def decode_value(value: Dict[str, Any]) -> Any:
    """Decode a single Firestore typed value into a plain Python value."""
    if not isinstance(value, dict) or len(value) != 1:
        raise MalformedResponse(f"Unexpected Firestore value: {value!r}")

    kind, raw = next(iter(value.items()))
    try:
        if kind in ("stringValue", "timestampValue", "referenceValue"):
            return raw
        if kind == "integerValue":
            # int64 values are transported as strings
            return int(raw)
        if kind == "doubleValue":
            return float(raw)
        if kind == "booleanValue":
            return bool(raw)
        if kind == "nullValue":
            return None
        if kind == "mapValue":
            return decode_fields(raw.get("fields", {}))
        if kind == "arrayValue":
            return [decode_value(v) for v in raw.get("values", [])]
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedResponse(f"Invalid Firestore {kind}: {raw!r}") from e

    raise MalformedResponse(f"Unsupported Firestore value type: {kind}")


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(fields, dict):
        raise MalformedResponse(f"Unexpected Firestore fields: {fields!r}")
    return {name: decode_value(value) for name, value in fields.items()}


def encode_value(value: Any) -> Dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": value.isoformat().replace("+00:00", "Z")}
    return {"stringValue": str(value)}


def encode_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {name: encode_value(value) for name, value in data.items()}


def document_id(document: Dict[str, Any]) -> str:
    """Last segment of the document resource name."""
    name = document.get("name", "")
    if not isinstance(name, str):
        raise MalformedResponse(f"Document name is not a string: {name!r}")
    return name.rsplit("/", 1)[-1]


@registry.register("firestore")
class FirestoreSource(RemoteSource):
    """Backup source reading and writing Firestore documents."""

    def _params(self, **extra) -> Dict[str, Any]:
        params = dict(extra)
        api_key = self.credentials.get("api_key")
        if api_key:
            params["key"] = api_key.strip()
        return params

    def _list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """Read every document of a collection, following page tokens."""
        records = []
        page_token = None
        seen_tokens = set()

        while True:
            params = self._params(pageSize=PAGE_SIZE)
            if page_token:
                params["pageToken"] = page_token

            payload = self._request("GET", collection, params=params)
            if not isinstance(payload, dict):
                raise MalformedResponse(f"{self.name}: listing of {collection} is not an object")

            documents = payload.get("documents", [])
            if not isinstance(documents, list):
                raise MalformedResponse(f"{self.name}: documents of {collection} is not a list")

            for document in documents:
                if not isinstance(document, dict):
                    raise MalformedResponse(f"{self.name}: document in {collection} is not an object")
                fields = decode_fields(document.get("fields", {}))
                # Documents written by the console may omit the id field
                fields.setdefault("id", document_id(document))
                records.append(fields)

            next_token = payload.get("nextPageToken")
            if not next_token:
                break
            if not isinstance(next_token, str) or next_token in seen_tokens:
                raise MalformedResponse(f"{self.name}: listing of {collection} returned a bad or repeated page token {next_token!r}")
            seen_tokens.add(next_token)
            page_token = next_token

        return records

    def get_articles(self) -> List[Article]:
        articles = self._parse_list(Article, self._list_documents("articles"))
        logger.info(f"FirestoreSource fetched {len(articles)} articles")
        return articles

    def get_providers(self) -> List[Provider]:
        providers = self._parse_list(Provider, self._list_documents("providers"))
        logger.info(f"FirestoreSource fetched {len(providers)} providers")
        return providers

    def submit_booking(
        self, request: BookingRequest, user_identity: Optional[str] = None
    ) -> BookingConfirmation:
        data = request.model_dump(by_alias=True, exclude_none=True)
        data["userId"] = user_identity or GUEST_USER_ID
        data["status"] = "confirmed"
        data["createdAt"] = datetime.now(timezone.utc)

        params = self._params()
        if request.request_id:
            # Firestore rejects a second create with the same document id
            params["documentId"] = request.request_id

        payload = self._request("POST", "bookings", json={"fields": encode_fields(data)}, params=params)
        if not isinstance(payload, dict):
            raise MalformedResponse(f"{self.name}: booking response is not an object")

        booking_id = document_id(payload)
        if not booking_id:
            raise MalformedResponse(f"{self.name}: booking response carries no document name")

        logger.info(f"FirestoreSource booking stored: {booking_id} for user {data['userId']}")
        return BookingConfirmation(
            id=booking_id,
            status="confirmed",
            message="Appointment booked successfully via backup service",
        )
