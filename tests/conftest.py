"""
Pytest configuration and shared fixtures for Auto-MQM tests.
"""
import sys
import asyncio
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mqm.evaluator import SegmentEvaluator
from mqm.models import Issue, SegmentEvaluation, SegmentPair, Severity
from mqm.scoring import totals_from_issues


# ============================================================================
# Fixtures: Temporary files
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fixtures: Sample Files
# ============================================================================

@pytest.fixture
def sample_tmx() -> bytes:
    """Two en->fr translation units."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<tmx version="1.4">
  <header srclang="en-US" datatype="plaintext" segtype="sentence" adminlang="en" o-tmf="test" creationtool="test" creationtoolversion="1"/>
  <body>
    <tu>
      <tuv xml:lang="en-US"><seg>Hello world.</seg></tuv>
      <tuv xml:lang="fr-FR"><seg>Bonjour le monde.</seg></tuv>
    </tu>
    <tu>
      <tuv xml:lang="en-US"><seg>Click <bpt i="1">&lt;b&gt;</bpt>Save<ept i="1">&lt;/b&gt;</ept> now.</seg></tuv>
      <tuv xml:lang="fr-FR"><seg>Cliquez sur Enregistrer maintenant.</seg></tuv>
    </tu>
  </body>
</tmx>
""".encode("utf-8")


@pytest.fixture
def sample_xliff() -> bytes:
    """XLIFF 1.2 with the OASIS namespace, one unit lacking a target."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file original="ui.properties" source-language="en" target-language="de-DE" datatype="plaintext">
    <body>
      <trans-unit id="greeting">
        <source>Good morning.</source>
        <target>Guten Morgen.</target>
      </trans-unit>
      <trans-unit id="farewell">
        <source>See you tomorrow.</source>
      </trans-unit>
    </body>
  </file>
</xliff>
""".encode("utf-8")


@pytest.fixture
def sample_xliff2() -> bytes:
    """XLIFF 2.0: languages on the root element."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="ja">
  <file id="f1">
    <unit id="u1">
      <segment>
        <source>Thank you.</source>
        <target>ありがとうございます。</target>
      </segment>
    </unit>
    <unit id="u2">
      <segment>
        <source>Goodbye.</source>
        <target>さようなら。</target>
      </segment>
    </unit>
  </file>
</xliff>
""".encode("utf-8")


# ============================================================================
# Fixtures: Evaluators
# ============================================================================

class FakeEvaluator(SegmentEvaluator):
    """
    Scripted evaluator: fixed score, optional issues per segment id,
    optional failures and latency. score and delay may be callables taking
    the SegmentPair. Records what it was asked.
    """

    def __init__(self, score=100.0, issues=None, fail_on=(), delay=0.0, model_id="fake-model"):
        self.score = score
        self.issues = issues or {}
        self.fail_on = set(fail_on)
        self.delay = delay
        self.model_id = model_id
        self.calls = []
        self.modes = []
        self.cancelled = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def evaluate(self, pair: SegmentPair, mode) -> SegmentEvaluation:
        self.calls.append(pair.id)
        self.modes.append(mode)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delay(pair) if callable(self.delay) else self.delay
            await asyncio.sleep(delay)
            if pair.id in self.fail_on:
                raise RuntimeError(f"model unavailable for segment {pair.id}")

            issues = tuple(self.issues.get(pair.id, ()))
            score = self.score(pair) if callable(self.score) else self.score
            return SegmentEvaluation(
                pair=pair,
                score=score,
                issues=issues,
                categories=totals_from_issues(issues),
            )
        except asyncio.CancelledError:
            self.cancelled.append(pair.id)
            raise
        finally:
            self.in_flight -= 1


@pytest.fixture
def make_evaluator():
    """Factory for FakeEvaluator instances."""
    def _make(**kwargs) -> FakeEvaluator:
        return FakeEvaluator(**kwargs)
    return _make


@pytest.fixture
def make_issue():
    """Factory for Issue objects with sensible defaults."""
    def _make(category="Fluency", severity=Severity.MINOR, **kwargs) -> Issue:
        return Issue(
            category=category,
            subcategory=kwargs.pop("subcategory", "Grammar"),
            severity=severity,
            **kwargs,
        )
    return _make


# ============================================================================
# Session-level Setup
# ============================================================================

def pytest_configure(config):
    """Register markers added below."""
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests spanning several components")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Auto-add 'unit' marker to test files in tests/unit/
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        # Auto-add 'integration' marker to test files in tests/integration/
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
