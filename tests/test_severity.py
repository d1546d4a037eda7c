from sbomgate.core.severity import CONCERNING, Severity, SeverityCounts


def test_missing_keys_default_to_zero():
    counts = SeverityCounts.from_mapping({"high": 2})
    assert counts.to_dict() == {"critical": 0, "high": 2, "medium": 0, "other": 0, "low": 0}


def test_malformed_values_never_raise():
    counts = SeverityCounts.from_mapping(
        {"critical": "lots", "high": None, "medium": -4, "other": True, "low": [1]}
    )
    assert counts == SeverityCounts()


def test_numeric_strings_and_integral_floats_are_accepted():
    counts = SeverityCounts.from_mapping({"critical": "3", "medium": 2.0, "other": 1.5})
    assert counts.critical == 3
    assert counts.medium == 2
    assert counts.other == 0


def test_non_mapping_input_is_all_zero():
    assert SeverityCounts.from_mapping(None) == SeverityCounts()
    assert SeverityCounts.from_mapping([1, 2, 3]) == SeverityCounts()


def test_concerning_excludes_low():
    counts = SeverityCounts(critical=1, high=2, medium=3, other=4, low=100)
    assert counts.concerning == 10
    assert Severity.LOW not in CONCERNING


def test_addition_sums_each_bucket():
    total = SeverityCounts(critical=1, low=3) + SeverityCounts(high=2, low=1)
    assert total == SeverityCounts(critical=1, high=2, low=4)
    assert total.concerning == 3
