from .model import (
    Arc,
    Diagram,
    DiagramError,
    DiagramState,
    DuplicateArcError,
    Node,
    SelfLoopError,
    Sign,
    UnknownArcError,
    UnknownNodeError,
)
from .geometry import (
    ArcPath,
    Circle,
    DegenerateCircleError,
    Footprint,
    circle_from_three_points,
    clamp_curvature,
    compute_arc_path,
    find_arc_ellipse_intersection,
)
from .analysis import (
    Loop,
    LoopStats,
    LoopType,
    classify_loops,
    find_all_simple_cycles,
    get_all_loops,
    is_arc_in_loop,
    loop_stats,
)
from .history import History
from .editor import Editor
from .fileio import DiagramFileError, dump_diagram, dumps_diagram, load_diagram, loads_diagram
from .config import (
    AnalysisConfig,
    GeometryConfig,
    get_analysis_config,
    get_geometry_config,
    set_analysis_config,
    set_geometry_config,
)

__all__ = [
    'Arc',
    'Diagram',
    'DiagramError',
    'DiagramState',
    'DuplicateArcError',
    'Node',
    'SelfLoopError',
    'Sign',
    'UnknownArcError',
    'UnknownNodeError',
    'ArcPath',
    'Circle',
    'DegenerateCircleError',
    'Footprint',
    'circle_from_three_points',
    'clamp_curvature',
    'compute_arc_path',
    'find_arc_ellipse_intersection',
    'Loop',
    'LoopStats',
    'LoopType',
    'classify_loops',
    'find_all_simple_cycles',
    'get_all_loops',
    'is_arc_in_loop',
    'loop_stats',
    'History',
    'Editor',
    'DiagramFileError',
    'dump_diagram',
    'dumps_diagram',
    'load_diagram',
    'loads_diagram',
    'AnalysisConfig',
    'GeometryConfig',
    'get_analysis_config',
    'get_geometry_config',
    'set_analysis_config',
    'set_geometry_config',
]
