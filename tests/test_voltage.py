import logging

from hwreport.report.voltage import print_voltage
from hwreport.sensors import FeatureKind, InRole

LABEL = "in0:" + " " * 8


def test_input_with_both_limits(make_feature, render) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 1.25, InRole.MIN: 1.1, InRole.MAX: 1.5})
    assert render(print_voltage, feature) == LABEL + " +1.25 V  (min =  +1.10 V, max =  +1.50 V)\n"


def test_min_only(make_feature, render) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 3.3, InRole.MIN: 3.0})
    line = render(print_voltage, feature)
    assert "(min =  +3.00 V)" in line
    assert "max" not in line


def test_max_only(make_feature, render) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 12.1, InRole.MAX: 13.2})
    assert render(print_voltage, feature) == LABEL + "+12.10 V  (max = +13.20 V)\n"


def test_no_limits(make_feature, render) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 5.0})
    assert render(print_voltage, feature) == LABEL + " +5.00 V\n"


def test_dedicated_max_alarm(make_feature, render) -> None:
    feature = make_feature(
        FeatureKind.IN, "in0", {InRole.INPUT: 1.6, InRole.MAX: 1.5, InRole.MIN_ALARM: 0, InRole.MAX_ALARM: 1}
    )
    line = render(print_voltage, feature)
    assert line.endswith(" ALARM (MAX)\n")
    assert "MIN, MAX" not in line


def test_dedicated_min_and_max_alarms(make_feature, render) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 0.0, InRole.MIN_ALARM: 1, InRole.MAX_ALARM: 1})
    assert render(print_voltage, feature).endswith(" ALARM (MIN, MAX)\n")


def test_dedicated_alarms_clear(make_feature, render) -> None:
    feature = make_feature(
        FeatureKind.IN, "in0", {InRole.INPUT: 1.2, InRole.ALARM: 1, InRole.MIN_ALARM: 0, InRole.MAX_ALARM: 0}
    )
    assert "ALARM" not in render(print_voltage, feature)


def test_combined_alarm(make_feature, render) -> None:
    raised = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 1.2, InRole.ALARM: 1})
    assert render(print_voltage, raised) == LABEL + " +1.20 V   ALARM\n"

    clear = make_feature(FeatureKind.IN, "in1", {InRole.INPUT: 1.2, InRole.ALARM: 0})
    assert render(print_voltage, clear) == "in1:" + " " * 8 + " +1.20 V\n"


def test_label_failure_is_reported(make_feature, render, caplog) -> None:
    feature = make_feature(FeatureKind.IN, "in0", {InRole.INPUT: 1.2}, label=None)
    with caplog.at_level(logging.ERROR, logger="hwreport"):
        assert render(print_voltage, feature) == ""
    assert any("Can't get in label" in record.getMessage() for record in caplog.records)
