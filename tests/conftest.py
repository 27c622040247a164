# SPDX-License-Identifier: Apache-2.0
"""Shared test fixtures."""

# Standard
from pathlib import Path

# First Party
from oml_hub.core.config import OMLConfig
import pytest

FLOW_XML = """<oml:flow xmlns:oml="http://openml.org/openml">
  <oml:id>{flow_id}</oml:id>
  <oml:uploader>2</oml:uploader>
  <oml:name>mlr.classif.rpart</oml:name>
  <oml:version>1</oml:version>
  <oml:external_version>R_3.2.4-v2.b4a3f309</oml:external_version>
  <oml:description>Decision tree learner</oml:description>
  <oml:creator>Terry Therneau</oml:creator>
  <oml:creator>Beth Atkinson</oml:creator>
  <oml:upload_date>2016-03-01T12:00:00</oml:upload_date>
  <oml:language>English</oml:language>
  <oml:dependencies>R_3.2.4, mlr_2.9</oml:dependencies>
  <oml:parameter>
    <oml:name>cp</oml:name>
    <oml:data_type>numeric</oml:data_type>
    <oml:default_value>0.01</oml:default_value>
    <oml:description>Complexity parameter</oml:description>
  </oml:parameter>
  <oml:parameter>
    <oml:name>maxdepth</oml:name>
    <oml:data_type>integer</oml:data_type>
  </oml:parameter>
  <oml:parameter>
    <oml:name>minsplit</oml:name>
    <oml:default_value>20</oml:default_value>
    <oml:recommendedRange>[2, 100]</oml:recommendedRange>
  </oml:parameter>
  <oml:tag>R</oml:tag>
  <oml:tag>tree</oml:tag>
</oml:flow>
"""

PIPELINE_XML = """<oml:flow xmlns:oml="http://openml.org/openml">
  <oml:id>100</oml:id>
  <oml:name>sklearn.pipeline.Pipeline</oml:name>
  <oml:version>3</oml:version>
  <oml:description>Pipeline</oml:description>
  <oml:upload_date>2017-05-01T09:30:00</oml:upload_date>
  <oml:bibliographical_reference>
    <oml:citation>Pedregosa et al. (2011)</oml:citation>
    <oml:url>http://jmlr.org/papers/v12/pedregosa11a.html</oml:url>
  </oml:bibliographical_reference>
  <oml:quality>
    <oml:name>NumberOfSteps</oml:name>
    <oml:value>2</oml:value>
  </oml:quality>
  <oml:component>
    <oml:identifier>imputer</oml:identifier>
    <oml:flow>
      <oml:id>101</oml:id>
      <oml:name>sklearn.impute.SimpleImputer</oml:name>
      <oml:version>1</oml:version>
      <oml:description>Imputer</oml:description>
      <oml:upload_date>2017-05-01T09:30:00</oml:upload_date>
      <oml:parameter>
        <oml:name>strategy</oml:name>
        <oml:default_value>"mean"</oml:default_value>
      </oml:parameter>
    </oml:flow>
  </oml:component>
  <oml:component>
    <oml:identifier>estimator</oml:identifier>
    <oml:flow>
      <oml:id>102</oml:id>
      <oml:name>sklearn.ensemble.Bagging</oml:name>
      <oml:version>2</oml:version>
      <oml:description>Bagging</oml:description>
      <oml:upload_date>2017-05-01T09:30:00</oml:upload_date>
      <oml:component>
        <oml:identifier>base_estimator</oml:identifier>
        <oml:flow>
          <oml:id>103</oml:id>
          <oml:name>sklearn.tree.DecisionTreeClassifier</oml:name>
          <oml:version>1</oml:version>
          <oml:description>Tree</oml:description>
          <oml:upload_date>2017-05-01T09:30:00</oml:upload_date>
        </oml:flow>
      </oml:component>
    </oml:flow>
  </oml:component>
</oml:flow>
"""


@pytest.fixture
def flow_xml():
    """Factory for a simple flow document without components."""

    def _flow_xml(flow_id=5804, extra=""):
        return FLOW_XML.format(flow_id=flow_id).replace(
            "</oml:flow>", f"{extra}</oml:flow>"
        )

    return _flow_xml


@pytest.fixture
def pipeline_xml():
    """Flow document with nested components."""
    return PIPELINE_XML


@pytest.fixture
def oml_config(tmp_path: Path):
    """Config pointing the cache at a temporary directory."""
    return OMLConfig(
        server="https://test.openml.org/api/v1/xml",
        cachedir=str(tmp_path / "cache"),
        verbosity=0,
        max_retries=2,
    )
