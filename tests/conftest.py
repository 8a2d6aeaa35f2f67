"""Pytest configuration for footprint decoder tests."""
import pytest

from kcdb.mod import parse_text


# SMD resistor as written by KiCad 5
SMD_FOOTPRINT = """\
(module R_0805_2012Metric (layer F.Cu) (tedit 5B36C52B)
  (descr "Resistor SMD 0805 (2012 Metric), square (rectangular) end terminal")
  (tags resistor)
  (attr smd)
  (fp_text reference REF** (at 0 -1.65) (layer F.SilkS)
    (effects (font (size 1 1) (thickness 0.15)))
  )
  (fp_text value R_0805_2012Metric (at 0 1.65) (layer F.Fab)
    (effects (font (size 1 1) (thickness 0.15)))
  )
  (fp_text user %R (at 0 0) (layer F.Fab)
    (effects (font (size 0.5 0.5) (thickness 0.08)))
  )
  (fp_line (start -1 0.6) (end -1 -0.6) (layer F.Fab) (width 0.1))
  (fp_line (start -1 -0.6) (end 1 -0.6) (layer F.Fab) (width 0.1))
  (fp_line (start 1 -0.6) (end 1 0.6) (layer F.Fab) (width 0.1))
  (fp_line (start 1 0.6) (end -1 0.6) (layer F.Fab) (width 0.1))
  (pad 1 smd roundrect (at -0.9375 0) (size 0.975 1.4) (layers F.Cu F.Paste F.Mask) (roundrect_rratio 0.25))
  (pad 2 smd roundrect (at 0.9375 0) (size 0.975 1.4) (layers F.Cu F.Paste F.Mask) (roundrect_rratio 0.25))
  (model ${KISYS3DMOD}/Resistor_SMD.3dshapes/R_0805_2012Metric.wrl
    (at (xyz 0 0 0))
    (scale (xyz 1 1 1))
    (rotate (xyz 0 0 0))
  )
)
"""

# Through-hole connector with slotted drills, a mounting hole and outline shapes
THT_FOOTPRINT = """\
(module Conn_Barrel (layer F.Cu) (tedit 5A02FE31)
  (descr "DC barrel jack")
  (tags "connector barrel jack")
  (autoplace_cost90 0)
  (autoplace_cost180 0)
  (clearance 0.25)
  (solder_mask_margin 0.05)
  (attr virtual)
  (fp_text reference J** (at 0 -8) (layer F.SilkS) hide
    (effects (font (size 1 1) (thickness 0.15)))
  )
  (fp_text value Conn_Barrel (at 0 8) (layer F.Fab)
    (effects (font (size 1.2 1.2) (thickness 0.18)))
  )
  (fp_circle (center 0 0) (end 3 0) (layer F.SilkS) (width 0.12))
  (fp_arc (start 0 0) (end 2 0) (angle 90) (layer F.Fab) (width 0.1))
  (fp_poly (pts (xy -1 -1) (xy 1 -1) (xy 1 1) (xy -1 1)) (layer F.Cu) (width 0.15))
  (pad 1 thru_hole rect (at 0 0) (size 3.5 3.5) (drill oval 1 3 (offset 0 0.5)) (layers *.Cu *.Mask))
  (pad 2 thru_hole oval (at 6 0) (size 3 3.5) (drill 1.5) (layers *.Cu *.Mask))
  (pad "" np_thru_hole circle (at 3 4.7) (size 2 2) (drill 2) (layers *.Cu *.Mask))
)
"""


@pytest.fixture
def smd_text():
    return SMD_FOOTPRINT


@pytest.fixture
def tht_text():
    return THT_FOOTPRINT


@pytest.fixture
def clause():
    """Parse a single expression and return it as a clause node."""
    def _clause(text: str):
        return parse_text(text).child(0)
    return _clause
