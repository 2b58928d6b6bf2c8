"""Shared fixtures: small inline Map Editor / Spooner / YMAP documents."""

from __future__ import annotations

import pytest

MAP_EDITOR_XML = """<?xml version="1.0"?>
<Map xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:xsd="http://www.w3.org/2001/XMLSchema">
  <Objects>
    <MapObject>
      <Type>Prop</Type>
      <Position><X>10</X><Y>0</Y><Z>0</Z></Position>
      <Rotation><X>0</X><Y>0</Y><Z>0</Z></Rotation>
      <Hash>6699</Hash>
      <Dynamic>false</Dynamic>
      <Quaternion><X>0.5</X><Y>0.5</Y><Z>0.5</Z><W>-0.5</W></Quaternion>
      <Door>false</Door>
    </MapObject>
    <MapObject>
      <Type>Prop</Type>
      <Position><X>-10</X><Y>0</Y><Z>0</Z></Position>
      <Hash>-1</Hash>
      <Dynamic>true</Dynamic>
      <Quaternion><X>0.25</X><Y>0.5</Y><Z>-0.25</Z><W>0.5</W></Quaternion>
      <Door>false</Door>
    </MapObject>
    <MapObject>
      <Type>Prop</Type>
      <Position><X>0</X><Y>0</Y><Z>0</Z></Position>
      <Hash>100</Hash>
      <Dynamic>false</Dynamic>
      <Quaternion><X>0</X><Y>0</Y><Z>0</Z><W>1</W></Quaternion>
      <Door>true</Door>
    </MapObject>
    <MapObject>
      <Type>Vehicle</Type>
      <Position><X>0</X><Y>0</Y><Z>0</Z></Position>
      <Hash>-1216765807</Hash>
      <Dynamic>true</Dynamic>
      <Quaternion><X>0</X><Y>0</Y><Z>0</Z><W>1</W></Quaternion>
      <Door>false</Door>
    </MapObject>
    <MapObject>
      <Type>Ped</Type>
      <Position><X>500</X><Y>500</Y><Z>500</Z></Position>
      <Hash>42</Hash>
      <Dynamic>true</Dynamic>
      <Door>false</Door>
    </MapObject>
  </Objects>
  <RemoveFromWorld />
  <Markers />
</Map>
"""

SPOONER_XML = """<?xml version="1.0" encoding="ISO-8859-1"?>
<SpoonerPlacements>
  <Note />
  <Placement>
    <ModelHash>0x1a2b</ModelHash>
    <Type>3</Type>
    <Dynamic>false</Dynamic>
    <PositionRotation>
      <X>3</X><Y>6</Y><Z>9</Z>
      <Pitch>0</Pitch><Roll>0</Roll><Yaw>0</Yaw>
    </PositionRotation>
  </Placement>
  <Placement>
    <ModelHash>0xdeadbeef</ModelHash>
    <Type>3</Type>
    <Dynamic>true</Dynamic>
    <HashName>prop_bench_01a</HashName>
    <PositionRotation>
      <X>0</X><Y>0</Y><Z>0</Z>
      <Pitch>0</Pitch><Roll>0</Roll><Yaw>0</Yaw>
    </PositionRotation>
  </Placement>
  <Placement>
    <ModelHash>0xb779a091</ModelHash>
    <Type>2</Type>
    <Dynamic>true</Dynamic>
    <HashName>adder</HashName>
    <PositionRotation>
      <X>0</X><Y>0</Y><Z>0</Z>
      <Pitch>0</Pitch><Roll>0</Roll><Yaw>90</Yaw>
    </PositionRotation>
  </Placement>
  <Placement>
    <ModelHash>0x1234</ModelHash>
    <Type>5</Type>
    <Dynamic>false</Dynamic>
    <PositionRotation><X>0</X><Y>0</Y><Z>0</Z></PositionRotation>
  </Placement>
</SpoonerPlacements>
"""

EMPTY_YMAP_XML = """<?xml version="1.0" encoding="utf-8"?>
<CMapData>
  <name>empty</name>
  <streamingExtentsMin x="1" y="2" z="3" />
  <streamingExtentsMax x="4" y="5" z="6" />
  <entities />
  <carGenerators />
</CMapData>
"""


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def map_editor_file(write_file):
    return write_file("placements.xml", MAP_EDITOR_XML)


@pytest.fixture
def spooner_file(write_file):
    return write_file("spooner.xml", SPOONER_XML)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("ymap_model_names", "ymap_log_level", "ymap_cargen_scale"):
        monkeypatch.delenv(key, raising=False)
