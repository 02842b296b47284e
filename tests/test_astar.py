import logging

import networkx as nx
import numpy as np
import pytest

from color_maze.astar import AStar, Outcome, find_path, octile_distance
from color_maze.colors import Role
from color_maze.graph import Direction, MazeGraph
from color_maze.render import trace_path


def oracle_cost(graph):
    """Dijkstra over the same move rules, built independently with networkx."""
    g = nx.Graph()
    for cell in graph.cells():
        if not cell.walkable:
            continue
        g.add_node(cell.coords)
        for direction in (Direction.EAST, Direction.SOUTH, Direction.SOUTHEAST, Direction.SOUTHWEST):
            x, y = cell.x + direction.dx, cell.y + direction.dy
            if not graph.in_bounds(x, y) or not graph.cell(x, y).walkable:
                continue
            if direction.is_diagonal:
                if not (graph.cell(cell.x + direction.dx, cell.y).walkable
                        and graph.cell(cell.x, cell.y + direction.dy).walkable):
                    continue
            g.add_edge(cell.coords, (x, y), weight=14 if direction.is_diagonal else 10)
    try:
        return nx.dijkstra_path_length(g, graph.start, graph.goal)
    except nx.NetworkXNoPath:
        return None


def random_roles(seed, size=24, wall_ratio=0.3):
    rng = np.random.default_rng(seed)
    roles = np.where(rng.random((size, size)) < wall_ratio, Role.WALL, Role.PASSABLE).astype(np.uint8)
    roles[0, 0] = Role.START
    roles[size - 1, size - 1] = Role.GOAL
    return roles


def assert_valid_path(graph, path):
    assert path[0] == graph.start
    assert path[-1] == graph.goal
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        dx, dy = x1 - x0, y1 - y0
        assert max(abs(dx), abs(dy)) == 1
        step = graph.cell(x1, y1)
        assert step.walkable
        assert step.parent == (x0, y0)
        if dx and dy:
            assert step.g - graph.cell(x0, y0).g == 14
            # never slip between two wall corners, nor past one
            assert graph.cell(x0 + dx, y0).walkable
            assert graph.cell(x0, y0 + dy).walkable
        else:
            assert step.g - graph.cell(x0, y0).g == 10


@pytest.mark.parametrize(
    "a, b, expected",
    [((0, 0), (0, 0), 0), ((0, 0), (3, 0), 30), ((0, 0), (3, 3), 42), ((0, 0), (3, 1), 34), ((5, 2), (1, 4), 48)],
)
def test_octile_distance(a, b, expected):
    assert octile_distance(a, b) == expected
    assert octile_distance(b, a) == expected


def test_gap_in_wall(maze_graph, gap_maze):
    graph = maze_graph(gap_maze)
    result = find_path(graph)
    assert result.outcome is Outcome.PATH_FOUND
    assert result.found
    assert result.cost == 40
    path = trace_path(graph)
    assert path == [(0, 2), (1, 2), (2, 2), (3, 2), (4, 2)]
    assert_valid_path(graph, path)


def test_closed_wall(maze_graph, closed_maze):
    result = find_path(maze_graph(closed_maze))
    assert result.outcome is Outcome.NO_PATH
    assert not result.found
    assert result.cost is None


def test_open_field_cost_is_octile_distance(maze_graph):
    graph = maze_graph([
        "S.......",
        "........",
        "........",
        "........",
        ".......G",
    ])
    result = find_path(graph)
    assert result.found
    assert result.cost == octile_distance(graph.start, graph.goal)
    assert_valid_path(graph, trace_path(graph))


def test_enclosed_start(maze_graph):
    graph = maze_graph([
        "#####...",
        "#SS#....",
        "#SS#...G",
        "####....",
    ])
    assert find_path(graph).outcome is Outcome.NO_PATH


def test_enclosed_goal(maze_graph):
    graph = maze_graph([
        "S.....",
        "...###",
        "...#G#",
        "...###",
    ])
    assert find_path(graph).outcome is Outcome.NO_PATH


def test_no_squeezing_between_wall_corners(maze_graph):
    assert not find_path(maze_graph(["S#", "#G"])).found


def test_no_cutting_a_single_corner(maze_graph):
    graph = maze_graph([
        "S#",
        ".G",
    ])
    result = find_path(graph)
    assert result.cost == 20
    assert trace_path(graph) == [(0, 0), (0, 1), (1, 1)]


def test_diagonal_when_corners_open(maze_graph):
    graph = maze_graph([
        "S.",
        ".G",
    ])
    result = find_path(graph)
    assert result.cost == 14
    assert trace_path(graph) == [(0, 0), (1, 1)]


def test_adjacent_regions(maze_graph):
    graph = maze_graph(["SG"])
    assert find_path(graph).cost == 10
    assert trace_path(graph) == [(0, 0), (1, 0)]


def test_start_region_is_walkable(maze_graph):
    # the only way out of the start anchor runs through other red pixels
    graph = maze_graph([
        "#####",
        "#SSS.",
        "####.",
        "G....",
    ])
    result = find_path(graph)
    assert graph.start == (2, 1)
    assert result.found
    assert_valid_path(graph, trace_path(graph))


def test_winding_maze(maze_graph):
    graph = maze_graph([
        "S.#.....",
        ".##.###.",
        "....#...",
        "###.#.##",
        "....#...",
        ".####.#.",
        "......#G",
    ])
    result = find_path(graph)
    assert result.found
    assert result.cost == oracle_cost(graph)
    assert_valid_path(graph, trace_path(graph))


@pytest.mark.parametrize("seed", range(12))
def test_matches_dijkstra_on_random_grids(seed):
    graph = MazeGraph.from_roles(random_roles(seed))
    expected = oracle_cost(graph)
    result = find_path(graph)
    if expected is None:
        assert result.outcome is Outcome.NO_PATH
    else:
        assert result.cost == expected
        assert_valid_path(graph, trace_path(graph))


def test_start_and_goal_cells_after_search(maze_graph, gap_maze):
    graph = maze_graph(gap_maze)
    find_path(graph)
    assert graph.start_cell.parent is None
    assert graph.start_cell.g == 0
    assert graph.start_cell.closed
    assert graph.goal_cell.closed
    for cell in graph.cells():
        assert not (cell.open and cell.closed)
        if not cell.walkable:
            assert not cell.open and not cell.closed


def test_deterministic_reruns(maze_graph):
    rows = [
        "S.........",
        "..........",
        "..........",
        ".........G",
    ]
    first = maze_graph(rows)
    find_path(first)
    second = maze_graph(rows)
    find_path(second)
    assert trace_path(first) == trace_path(second)

    # searching the same graph again starts from clean state
    again = AStar(first).run()
    assert again.found
    assert trace_path(first) == trace_path(second)


def test_expansion_cap(maze_graph, gap_maze):
    graph = maze_graph(gap_maze)
    result = find_path(graph, max_expansions=2)
    assert result.outcome is Outcome.NO_PATH
    assert result.expanded == 2


def test_on_close_sees_every_expansion(maze_graph, gap_maze):
    seen = []
    result = find_path(maze_graph(gap_maze), on_close=lambda cell: seen.append(cell.coords))
    assert len(seen) == result.expanded
    assert len(set(seen)) == len(seen)
    assert seen[0] == (0, 2)
    assert seen[-1] == (4, 2)


def test_injected_logger(maze_graph, closed_maze, caplog):
    logger = logging.getLogger("maze-test")
    with caplog.at_level(logging.INFO, logger="maze-test"):
        find_path(maze_graph(closed_maze), logger=logger)
    assert any("no path" in r.getMessage() for r in caplog.records if r.name == "maze-test")
