"""Basic import tests to verify package structure."""


def test_import_gravstream():
    """Verify main package imports."""
    import gravstream
    assert gravstream.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from gravstream import core
    assert hasattr(core, "ParticleSystem")


def test_import_render():
    """Verify render module structure exists."""
    from gravstream import render
    assert hasattr(render, "FadeRenderer")


def test_import_stream():
    """Verify stream module structure exists."""
    from gravstream import stream
    assert hasattr(stream, "run")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from gravstream import analysis
    assert hasattr(analysis, "__doc__")
