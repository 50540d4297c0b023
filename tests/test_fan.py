import logging

from hwreport.report.fan import print_fan
from hwreport.sensors import FanRole, FeatureKind

LABEL = "fan1:" + " " * 7


def test_speed_with_min_and_div(make_feature, render) -> None:
    feature = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 2367.0, FanRole.MIN: 1500.0, FanRole.DIV: 4.0})
    assert render(print_fan, feature) == LABEL + "2367 RPM  (min = 1500 RPM, div = 4)\n"


def test_speed_is_rounded(make_feature, render) -> None:
    feature = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 812.7})
    assert render(print_fan, feature) == LABEL + " 813 RPM\n"


def test_single_limits(make_feature, render) -> None:
    with_min = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 900.0, FanRole.MIN: 600.0})
    assert render(print_fan, with_min).endswith("  (min =  600 RPM)\n")

    with_div = make_feature(FeatureKind.FAN, "fan2", {FanRole.INPUT: 900.0, FanRole.DIV: 8.0})
    assert render(print_fan, with_div).endswith("  (div = 8)\n")


def test_fault_replaces_speed(make_feature, render) -> None:
    feature = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 1200.0, FanRole.FAULT: 1})
    line = render(print_fan, feature)
    assert line == LABEL + "   FAULT\n"
    assert "1200" not in line


def test_alarm(make_feature, render) -> None:
    feature = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 0.0, FanRole.MIN: 600.0, FanRole.ALARM: 1})
    assert render(print_fan, feature) == LABEL + "   0 RPM  (min =  600 RPM)  ALARM\n"


def test_label_failure_is_reported(make_feature, render, caplog) -> None:
    feature = make_feature(FeatureKind.FAN, "fan1", {FanRole.INPUT: 900.0}, label=None)
    with caplog.at_level(logging.ERROR, logger="hwreport"):
        assert render(print_fan, feature) == ""
    assert any("Can't get fan label" in record.getMessage() for record in caplog.records)
