import pytest

from kubeshark.semver import SemVersion


def test_is_valid_with_three_numbers():
    assert SemVersion("1.16.0").is_valid() is True


def test_is_valid_with_two_numbers():
    assert SemVersion("v1.2").is_valid() is False


def test_breakdown_ignores_prefix_and_suffix():
    assert SemVersion("v1.27.3-gke.100").breakdown() == ("1", "27", "3")


def test_parts_agree_with_breakdown():
    version = SemVersion("v4.5.6")
    assert (version.major(), version.minor(), version.patch()) == version.breakdown()


def test_breakdown_of_invalid_version_raises():
    with pytest.raises(ValueError):
        SemVersion("latest").breakdown()


def test_major_of_invalid_version_raises():
    with pytest.raises(ValueError):
        SemVersion("1.2").major()


def test_greater_than_by_patch():
    assert SemVersion("1.16.1").greater_than(SemVersion("1.16.0")) is True


def test_greater_than_by_major():
    assert SemVersion("2.0.0").greater_than("1.99.99") is True


def test_not_greater_than_itself():
    assert SemVersion("1.16.0").greater_than("1.16.0") is False


def test_greater_than_is_antisymmetric():
    low, high = SemVersion("1.15.9"), SemVersion("1.16.0")
    assert high.greater_than(low) is True
    assert low.greater_than(high) is False


def test_parts_are_compared_as_strings():
    assert SemVersion("1.9.0").greater_than("1.10.0") is True


def test_behaves_as_plain_string():
    assert SemVersion("1.2.3") == "1.2.3"