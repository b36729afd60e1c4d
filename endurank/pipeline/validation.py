"""
Duplicate detection for admin catalog submissions.

Two checks run in order for each submission:

1. Exact match - blocking. A hit returns ``is_valid=False`` with the
   existing item. A store failure raises ``DuplicateCheckError``: the
   caller could not validate and must not treat that as "no duplicate".
2. Fuzzy match - advisory. Never blocks; returns similar names as a
   warning. A store failure fails open with no similar items.
"""
import logging
from typing import Optional, Union

from pydantic import ValidationError

from ..client.store import COLLECTIONS, CatalogStore
from ..config import get_config
from ..exceptions import DuplicateCheckError, StoreError
from ..models.catalog import GearItem, GearSubmission, RaceItem, RaceSubmission
from ..models.validation import ValidationResult
from .similarity import find_similar


logger = logging.getLogger(__name__)

GEAR_MPN_DUPLICATE = "This item already exists (matching MPN/SKU). Please review this item instead."
GEAR_COMPOSITE_DUPLICATE = (
    "This item already exists (matching Brand + Product Name + Price). "
    "Please review this item instead."
)
RACE_COMPOSITE_DUPLICATE = (
    "This race already exists (matching Name + Distance + Location). "
    "Please review this race instead."
)

SubmissionModel = Union[GearSubmission, RaceSubmission]


def _same_place(race: RaceItem, city: str, state: str) -> bool:
    return (
        race.location.city.lower() == city.lower()
        and race.location.state.lower() == state.lower()
    )


def _same_place_doc(location: dict, city: str, state: str) -> bool:
    """Same check on a raw location document, before model validation."""
    return (
        str(location.get("city", "")).lower() == city.lower()
        and str(location.get("state", "")).lower() == state.lower()
    )


class DuplicateValidator:
    """
    Exact and fuzzy duplicate checks against the catalog store.
    One pair of checks per catalog kind, plus entry points that dispatch
    on the submission's kind.
    """

    def __init__(self, store: CatalogStore, threshold: Optional[int] = None):
        self.store = store
        self.threshold = threshold if threshold is not None else get_config().matching.similarity_threshold

    # Entry points

    def check_exact(self, submission: SubmissionModel) -> ValidationResult:
        """Blocking check for a gear or race submission."""
        if isinstance(submission, GearSubmission):
            return self.check_exact_gear(
                brand=submission.brand,
                product_name=submission.product_name,
                msrp=submission.msrp,
                mpn=submission.mpn,
            )
        elif isinstance(submission, RaceSubmission):
            return self.check_exact_race(
                race_name=submission.race_name,
                distance=submission.distance,
                city=submission.city,
                state=submission.state,
            )
        raise TypeError(f"Unsupported submission type: {type(submission).__name__}")

    def check_similar(self, submission: SubmissionModel) -> ValidationResult:
        """Advisory check for a gear or race submission."""
        if isinstance(submission, GearSubmission):
            return self.check_similar_gear(
                brand=submission.brand,
                product_name=submission.product_name,
                sub_category=submission.sub_category,
            )
        elif isinstance(submission, RaceSubmission):
            return self.check_similar_race(
                race_name=submission.race_name,
                city=submission.city,
                state=submission.state,
            )
        raise TypeError(f"Unsupported submission type: {type(submission).__name__}")

    def validate(self, submission: SubmissionModel, confirmed: bool = False) -> ValidationResult:
        """
        Run both checks for one submission.

        The fuzzy check is skipped when the exact check blocks, or when the
        caller has already shown the warning and the admin confirmed.
        """
        exact = self.check_exact(submission)
        if not exact.is_valid or confirmed:
            return exact
        return self.check_similar(submission)

    # Gear

    def check_exact_gear(
        self,
        brand: str,
        product_name: str,
        msrp: float,
        mpn: Optional[str] = None,
    ) -> ValidationResult:
        """
        Look for the same gear by MPN first, then by brand + name + price.

        Raises:
            DuplicateCheckError: the store could not be queried
        """
        try:
            if mpn and mpn.strip():
                matches = self.store.find_by_field(COLLECTIONS["gear"], "mpn", mpn.strip())
                if matches:
                    return ValidationResult(
                        is_valid=False,
                        error=GEAR_MPN_DUPLICATE,
                        duplicate_item=GearItem.model_validate(matches[0]),
                    )

            matches = self.store.find_by_fields(
                COLLECTIONS["gear"],
                {"brand": brand, "productName": product_name, "msrp": msrp},
            )
            if matches:
                return ValidationResult(
                    is_valid=False,
                    error=GEAR_COMPOSITE_DUPLICATE,
                    duplicate_item=GearItem.model_validate(matches[0]),
                )
        except (StoreError, ValidationError) as e:
            logger.error(f"Error checking gear match for '{product_name}': {e}")
            raise DuplicateCheckError("Failed to validate item. Please try again.") from e

        return ValidationResult(is_valid=True)

    def check_similar_gear(
        self,
        brand: str,
        product_name: str,
        sub_category: str,
    ) -> ValidationResult:
        """Warn about gear of the same brand and sub-category with a similar name."""
        try:
            docs = self.store.find_by_fields(
                COLLECTIONS["gear"],
                {"brand": brand, "subCategory": sub_category},
            )
            candidates = [GearItem.model_validate(doc) for doc in docs]
        except (StoreError, ValidationError) as e:
            logger.warning(f"Similar gear check failed open for '{product_name}': {e}")
            return ValidationResult(is_valid=True)

        similar = find_similar(product_name, candidates, self.threshold)
        if similar:
            logger.info(f"Found {len(similar)} gear items similar to '{product_name}'")
        return ValidationResult(is_valid=True, similar_items=similar)

    # Races

    def check_exact_race(
        self,
        race_name: str,
        distance: str,
        city: str,
        state: str,
    ) -> ValidationResult:
        """
        Look for the same race by name + distance, then narrow to the same
        city and state (case-insensitive) in memory, since the location is
        a nested field the store does not filter on.

        Raises:
            DuplicateCheckError: the store could not be queried
        """
        try:
            docs = self.store.find_by_fields(
                COLLECTIONS["races"],
                {"raceName": race_name, "distance": distance},
            )
            races = [RaceItem.model_validate(doc) for doc in docs]
        except (StoreError, ValidationError) as e:
            logger.error(f"Error checking race match for '{race_name}': {e}")
            raise DuplicateCheckError("Failed to validate race. Please try again.") from e

        match = next((race for race in races if _same_place(race, city, state)), None)
        if match is not None:
            return ValidationResult(
                is_valid=False,
                error=RACE_COMPOSITE_DUPLICATE,
                duplicate_item=match,
            )

        return ValidationResult(is_valid=True)

    def check_similar_race(
        self,
        race_name: str,
        city: str,
        state: str,
    ) -> ValidationResult:
        """
        Warn about races in the same city and state with a similar name.
        Unreadable race documents are skipped one at a time.
        """
        try:
            docs = self.store.list_all(COLLECTIONS["races"])
        except StoreError as e:
            logger.warning(f"Similar race check failed open for '{race_name}': {e}")
            return ValidationResult(is_valid=True)

        candidates = []
        for doc in docs:
            location = doc.get("location")
            if not isinstance(location, dict) or not _same_place_doc(location, city, state):
                continue
            try:
                candidates.append(RaceItem.model_validate(doc))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable race {doc.get('raceId')!r}: {e}")

        similar = find_similar(race_name, candidates, self.threshold)
        if similar:
            logger.info(f"Found {len(similar)} races similar to '{race_name}'")
        return ValidationResult(is_valid=True, similar_items=similar)
