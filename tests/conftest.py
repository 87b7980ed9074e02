"""Pytest configuration and shared fixtures for gpx-fastpath tests."""

import pytest


GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="gpx-fastpath tests" '
    'xmlns="http://www.topografix.com/GPX/1/1">\n'
    ' <metadata><time>2024-06-15T08:00:00Z</time></metadata>\n'
    ' <trk>\n'
    '  <name>Morning Ride</name>\n'
    '  <trkseg>\n'
)
GPX_FOOTER = '  </trkseg>\n </trk>\n</gpx>\n'


def build_trkpt(lat, lon, ele=None, quote='"', extra=""):
    """Render one <trkpt> element; ele=None leaves out the <ele> element."""
    q = quote
    ele_xml = f"<ele>{ele}</ele>" if ele is not None else ""
    return f'   <trkpt lat={q}{lat}{q} lon={q}{lon}{q}>\n    {ele_xml}{extra}\n   </trkpt>\n'


def build_gpx(trkpts):
    """Wrap rendered <trkpt> elements in a single-track GPX document."""
    return (GPX_HEADER + "".join(trkpts) + GPX_FOOTER).encode("utf-8")


def varied_points(count):
    """Points as strings whose byte lengths differ from point to point."""
    points = []
    for i in range(count):
        lat = f"{37.9 + i * 0.00037:.{4 + i % 4}f}"
        lon = f"{-5.76 - i * 0.00041:.{3 + i % 5}f}"
        ele = f"{600 + (i % 17) * 1.25:.{i % 3}f}"
        points.append((lat, lon, ele))
    return points


def varied_trkpts(points, quote='"'):
    """Render points, adding timestamps and extensions to some of them."""
    trkpts = []
    for i, (lat, lon, ele) in enumerate(points):
        extra = ""
        if i % 3 == 0:
            extra = f"<time>2024-06-15T08:{i % 60:02d}:00Z</time>"
        if i % 5 == 0:
            extra += f"<extensions><hr>{120 + i % 40}</hr></extensions>"
        trkpts.append(build_trkpt(lat, lon, ele, quote=quote, extra=extra))
    return trkpts


@pytest.fixture
def sample_points():
    """Sixty points with varying text lengths."""
    return varied_points(60)


@pytest.fixture
def sample_gpx(sample_points):
    """Well-formed double-quoted GPX document for sample_points."""
    return build_gpx(varied_trkpts(sample_points))


@pytest.fixture
def gpx_file(tmp_path, sample_gpx):
    """sample_gpx written to a .gpx file."""
    path = tmp_path / "ride.gpx"
    path.write_bytes(sample_gpx)
    return path


MULTI_TRACK_GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="Garmin Connect" xmlns="http://www.topografix.com/GPX/1/1">
  <metadata><time>2024-06-15T08:00:00Z</time></metadata>
  <trk>
    <name>Climb</name>
    <trkseg>
      <trkpt lat="46.5000" lon="7.9000"><ele>1000.0</ele></trkpt>
      <trkpt lat="46.5010" lon="7.9010"><ele>1010.0</ele></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="46.5020" lon="7.9020"><ele>1020.0</ele></trkpt>
    </trkseg>
  </trk>
  <trk>
    <name>Descent</name>
    <trkseg>
      <trkpt lat="46.5030" lon="7.9030"><ele>990.0</ele></trkpt>
      <trkpt lat="46.5040" lon="7.9040"><ele>980.0</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def multi_track_gpx():
    """GPX 1.1 document with two tracks and three segments."""
    return MULTI_TRACK_GPX
