from cld_core.config import (
    AnalysisConfig,
    GeometryConfig,
    get_analysis_config,
    get_geometry_config,
    set_analysis_config,
    set_geometry_config,
)
from cld_core.model import Diagram


def test_getters_return_copies():
    config = get_geometry_config()
    config.default_curvature = 99.0

    assert get_geometry_config().default_curvature == 40.0


def test_setter_changes_new_arc_defaults():
    original = get_geometry_config()
    try:
        set_geometry_config(GeometryConfig(default_curvature=25.0))
        diagram = Diagram()
        a = diagram.add_node(0, 0)
        b = diagram.add_node(100, 0)

        assert diagram.add_arc(a.id, b.id).curvature == 25.0
    finally:
        set_geometry_config(original)


def test_analysis_limits_can_be_replaced():
    original = get_analysis_config()
    try:
        set_analysis_config(AnalysisConfig(max_nodes=None))

        assert get_analysis_config().max_nodes is None
        assert get_analysis_config().max_arcs == 200
    finally:
        set_analysis_config(original)
