"""
Unit tests for shelter list filtering.
"""

import pytest
from pydantic import ValidationError

from pawshelters.filters import filter_shelters, shelter_matches
from pawshelters.schemas.shelter_data import EnrichedShelter, ShelterDetail, FilterCriteria
from pawshelters.utils.validators import validate_filter_criteria


def make_shelter(shelter_id, name, location, rating=None, shelter_type="animal_shelter"):
    """Build an enriched shelter for filtering tests."""
    return EnrichedShelter(
        id=shelter_id,
        full_name=name,
        shelter_details=ShelterDetail(
            profile_id=shelter_id,
            shelter_name=name,
            shelter_type=shelter_type,
            location=location,
            rating=rating,
        ),
        animals_count=0,
    )


class TestFilterShelters:
    """Unit tests for filter_shelters."""

    @pytest.fixture
    def shelters(self):
        """Two rated shelters in different cities."""
        return [
            make_shelter("s1", "Oasis", "Kyiv", rating=4),
            make_shelter("s2", "Haven", "Lviv", rating=2),
        ]

    @staticmethod
    def names(shelters):
        return [s.shelter_details.shelter_name for s in shelters]

    def test_no_criteria_returns_everything(self, shelters):
        """Test that an empty query and empty criteria keep every shelter."""
        assert filter_shelters(shelters) == shelters
        assert filter_shelters(shelters, "", FilterCriteria()) == shelters

    def test_query_matches_location_case_insensitive(self, shelters):
        """Test that the text query matches the location ignoring case."""
        assert self.names(filter_shelters(shelters, "kyiv")) == ["Oasis"]

    def test_query_matches_name(self, shelters):
        """Test that the text query matches the shelter name."""
        assert self.names(filter_shelters(shelters, "HAV")) == ["Haven"]

    def test_rating_threshold(self, shelters):
        """Test the minimum rating filter."""
        criteria = FilterCriteria(rating="3")
        assert self.names(filter_shelters(shelters, "", criteria)) == ["Oasis"]

    def test_rating_threshold_is_inclusive(self, shelters):
        """Test that a rating equal to the threshold passes."""
        criteria = FilterCriteria(rating="2")
        assert self.names(filter_shelters(shelters, "", criteria)) == ["Oasis", "Haven"]

    @pytest.mark.parametrize("rating", ["1", "3", "5"])
    def test_unmatched_query_with_rating_is_empty(self, shelters, rating):
        """Test that an unmatched query stays empty whatever the rating filter."""
        criteria = FilterCriteria(rating=rating)
        assert filter_shelters(shelters, "odesa", criteria) == []

    def test_unrated_shelter_excluded_by_any_rating_filter(self):
        """Test that a shelter without rating never passes a rating filter."""
        shelters = [make_shelter("s3", "Kyiv Paws", "Kyiv", rating=None)]

        assert len(filter_shelters(shelters, "kyiv")) == 1
        assert filter_shelters(shelters, "kyiv", FilterCriteria(rating="0")) == []
        assert filter_shelters(shelters, "kyiv", FilterCriteria(rating="1")) == []

    def test_shelter_type_exact_match(self):
        """Test the shelter type criterion."""
        shelters = [
            make_shelter("s1", "Oasis", "Kyiv", shelter_type="animal_shelter"),
            make_shelter("s2", "Vet Point", "Kyiv", shelter_type="vet_clinic"),
        ]
        criteria = FilterCriteria(shelter_type="vet_clinic")
        assert self.names(filter_shelters(shelters, "", criteria)) == ["Vet Point"]

    def test_location_criterion_is_substring(self, shelters):
        """Test the separate location criterion."""
        criteria = FilterCriteria(location="LV")
        assert self.names(filter_shelters(shelters, "", criteria)) == ["Haven"]

    def test_location_criterion_keeps_surrounding_whitespace(self):
        """Test that form values reach the filter verbatim, spaces included."""
        shelters = [
            make_shelter("s1", "Oasis", "Kyiv", rating=4),
            make_shelter("s2", "Irpin Paws", "Irpin, Kyiv region", rating=3),
        ]

        is_valid, _, criteria = validate_filter_criteria({"location": " Kyiv"})

        assert is_valid
        assert criteria.location == " Kyiv"
        assert self.names(filter_shelters(shelters, "", criteria)) == ["Irpin Paws"]

    def test_criteria_are_combined_with_and(self, shelters):
        """Test that all active criteria must hold together."""
        criteria = FilterCriteria(location="lviv", rating="3")
        assert filter_shelters(shelters, "", criteria) == []

    def test_free_places_is_not_applied(self, shelters):
        """Test that free_places never changes the result."""
        criteria = FilterCriteria(free_places="10")
        assert filter_shelters(shelters, "", criteria) == shelters

    def test_filtering_is_idempotent(self, shelters):
        """Test that filtering twice yields the same result as once."""
        criteria = FilterCriteria(rating="3")
        once = filter_shelters(shelters, "a", criteria)
        twice = filter_shelters(once, "a", criteria)
        assert once == twice

    def test_order_is_preserved(self):
        """Test that filtering keeps the input order."""
        shelters = [
            make_shelter("s1", "Zebra Haven", "Kyiv"),
            make_shelter("s2", "Alpha Home", "Kyiv"),
            make_shelter("s3", "Middle Paws", "Kyiv"),
        ]
        result = filter_shelters(shelters, "kyiv")
        assert [s.id for s in result] == ["s1", "s2", "s3"]

    def test_missing_name_and_location_match_empty_query_only(self):
        """Test that blank detail fields are treated as empty strings."""
        shelter = make_shelter("s1", None, None)
        assert shelter_matches(shelter, "")
        assert not shelter_matches(shelter, "kyiv")


class TestFilterCriteria:
    """Unit tests for FilterCriteria validation."""

    def test_defaults_are_inactive(self):
        """Test that a fresh criteria object filters nothing."""
        criteria = FilterCriteria()
        assert criteria.minimum_rating() is None
        assert criteria.shelter_type == ""

    def test_numeric_rating(self):
        """Test that numeric ratings are accepted."""
        assert FilterCriteria(rating="3").minimum_rating() == 3.0
        assert FilterCriteria(rating=" 4.5 ").minimum_rating() == 4.5

    def test_non_numeric_rating_rejected(self):
        """Test that a non-numeric rating is rejected."""
        with pytest.raises(ValidationError):
            FilterCriteria(rating="five")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
