import io

import pytest

from radarmap.datmap import (
    DatLatLon,
    DatMapInfo,
    convert_file,
    lat_decimal_to_dms,
    lon_decimal_to_dms,
    main,
    parse_dat,
    parse_lat_lon,
    write_map,
)
from radarmap.validators import is_latitude, is_longitude

SAMPLE = [">\n", "127.5\t35.5\n", "126.25\t36.75\n", ">\n", "128.0\t34.0\n"]


def test_lat_pinned_value():
    assert lat_decimal_to_dms(35.5) == "N35300000"


def test_lon_negative_pinned_value():
    assert lon_decimal_to_dms(-127.25) == "W127150000"


@pytest.mark.parametrize("value", [0.0, 12.3456, -45.9, 89.999])
def test_lat_shape(value):
    text = lat_decimal_to_dms(value)
    assert text[0] == ("S" if value < 0 else "N")
    assert is_latitude(text)


@pytest.mark.parametrize("value", [0.0, 127.123, -179.5, 5.01])
def test_lon_shape(value):
    text = lon_decimal_to_dms(value)
    assert text[0] == ("W" if value < 0 else "E")
    assert is_longitude(text)


def test_sign_does_not_change_digits():
    assert lat_decimal_to_dms(-33.2)[1:] == lat_decimal_to_dms(33.2)[1:]


def test_parse_lat_lon_swaps_order():
    assert parse_lat_lon("127.5\t35.5") == ("35.5", "127.5")


def test_parse_lat_lon_rejects_missing_tab():
    with pytest.raises(ValueError):
        parse_lat_lon("127.5 35.5")


def test_parse_dat_groups_points():
    maps = parse_dat(SAMPLE)
    assert [len(m) for m in maps] == [2, 1]
    assert maps[0].points[1] == DatLatLon("36.75", "126.25")


def test_parse_dat_rejects_point_before_marker():
    with pytest.raises(ValueError):
        parse_dat(["127.5\t35.5\n"])


def test_process_fills_dms_fields():
    point = DatLatLon("35.5", "127.5")
    point.process()
    assert point.dms_lat == lat_decimal_to_dms(35.5)
    assert point.dms_lon == lon_decimal_to_dms(127.5)


def test_map_info_add_and_process():
    info = DatMapInfo()
    info.add(DatLatLon("1.5", "2.5"))
    info.process()
    assert info.points[0].dms_lat == lat_decimal_to_dms(1.5)


def test_write_map_records():
    maps = parse_dat(SAMPLE)
    for info in maps:
        info.process()
    out = io.StringIO()
    write_map(maps, out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "ID:0:2:P"
    assert lines[3] == "ID:1:1:P"
    assert lines[1] == "G:" + lat_decimal_to_dms(35.5) + lon_decimal_to_dms(127.5)
    assert len(lines) == 5


def test_convert_file_and_main(tmp_path):
    src = tmp_path / "coast.dat"
    src.write_text("".join(SAMPLE), encoding="utf-8")
    dst = tmp_path / "coast.map"
    maps = convert_file(src, dst)
    written = dst.read_text(encoding="utf-8")
    assert written.count("ID:") == len(maps)

    other = tmp_path / "again.map"
    assert main([str(src), str(other)]) == 0
    assert other.read_text(encoding="utf-8") == written


def test_main_reports_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.dat"), str(tmp_path / "out.map")]) == 1