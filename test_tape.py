"""
Recording machinery: tapes, shadow records, nodes and call interception.
"""

import math

import numpy as np
import pytest

from tapegrad.core import (
    Tape,
    ShadowRecord,
    Edge,
    Node,
    Primitive,
    TapeMisuseError,
    GradientTypeError,
    IndependentOutputWarning,
    active_tapes,
    recording,
    forward_pass,
    backward_pass,
    getval,
    grad,
    use_config,
    zeros_like,
    define_gradient,
    define_gradients,
    mark_zero_gradient,
)
from tapegrad.core.graph_utils import get_graph_stats, print_graph_summary, print_computation_graph
from tapegrad.ops import sin, cos, add


def test_node_creation_appends_one_record_per_tape():
    t1, t2 = Tape(), Tape()
    x = Node(2.0, [t1, t2])
    assert len(t1) == 1 and len(t2) == 1
    assert x.tapes == {t1: 0, t2: 0}
    record = x.record_on(t1)
    assert record.node_value == 2.0
    assert record.node_type is Node
    assert record.edges == [] and record.outgrads == []


def test_getval():
    t = Tape()
    assert getval(Node(1.5, [t])) == 1.5
    assert getval(1.5) == 1.5


def test_tape_complete_is_final():
    t = Tape()
    t.append(ShadowRecord(float, 1.0))
    assert not t.is_complete
    t.complete()
    assert t.is_complete
    with pytest.raises(TapeMisuseError):
        t.append(ShadowRecord(float, 2.0))
    with pytest.raises(TapeMisuseError):
        t.complete()


def test_backward_pass_twice_is_rejected():
    start, end, tape = forward_pass(sin, (1.0,), {}, 1)
    assert np.isclose(backward_pass(start, end, tape), math.cos(1.0))
    with pytest.raises(TapeMisuseError):
        backward_pass(start, end, tape)


def test_backward_pass_twice_is_rejected_for_independent_output():
    start, end, tape = forward_pass(lambda x: 3.0, (1.0,), {}, 1)
    with pytest.warns(IndependentOutputWarning):
        assert backward_pass(start, end, tape) == 0.0
    assert tape.is_complete
    with pytest.raises(TapeMisuseError):
        backward_pass(start, end, tape)


def test_recording_tracks_active_tapes():
    assert active_tapes() == ()
    with recording() as outer:
        with recording() as inner:
            assert active_tapes() == (outer, inner)
        assert active_tapes() == (outer,)
    assert active_tapes() == ()


def test_recording_rejects_completed_tape():
    t = Tape()
    t.complete()
    with pytest.raises(TapeMisuseError):
        with recording(t):
            pass


def test_primitive_without_nodes_is_pass_through():
    calls = []

    def f(x, y):
        calls.append((x, y))
        return x * y

    p = Primitive(f)
    assert p(2.0, 3.0) == 6.0
    assert calls == [(2.0, 3.0)]
    assert p.__name__ == "f"


def test_interception_records_edges_on_consumer():
    t = Tape()
    x = Node(0.5, [t])
    y = sin(x)
    assert isinstance(y, Node)
    assert np.isclose(y.value, math.sin(0.5))
    assert len(t) == 2
    record = y.record_on(t)
    assert len(record.edges) == 1
    edge = record.edges[0]
    assert isinstance(edge, Edge)
    assert edge.parent == x.tapes[t]
    assert np.isclose(getval(edge.transform(1.0)), math.cos(0.5))
    # producer side is untouched
    assert x.record_on(t).edges == []


def test_interception_skips_completed_tapes():
    t = Tape()
    x = Node(0.5, [t])
    t.complete()
    y = sin(x)
    assert not isinstance(y, Node)
    assert np.isclose(y, math.sin(0.5))


def test_result_linked_to_union_of_argument_tapes():
    t1, t2 = Tape(), Tape()
    a = Node(1.0, [t1])
    b = Node(2.0, [t2])
    c = add(a, b)
    assert set(c.tapes) == {t1, t2}
    assert [e.parent for e in c.record_on(t1).edges] == [a.tapes[t1]]
    assert [e.parent for e in c.record_on(t2).edges] == [b.tapes[t2]]


def test_zero_gradient_positions_are_not_recorded():
    def clip_to(x, bound):
        return min(x, bound)

    p = Primitive(clip_to)
    define_gradient(p, lambda ans, x, bound: lambda g: g if x < bound else 0.0, argnum=1)
    mark_zero_gradient(p, [2])

    t = Tape()
    bound = Node(5.0, [t])
    assert p(1.0, bound) == 1.0  # only a zero-gradient Node argument: raw result
    x = Node(1.0, [t])
    out = p(x, bound)
    assert [e.parent for e in out.record_on(t).edges] == [x.tapes[t]]
    assert grad(lambda x: p(x, 5.0))(1.0) == 1.0
    with pytest.warns(IndependentOutputWarning):
        assert grad(lambda b: p(1.0, b))(5.0) == 0.0


def test_define_gradients_partially_applies_argnum():
    def weighted(x, y):
        return 2.0 * x + 3.0 * y

    p = Primitive(weighted)
    weights = {1: 2.0, 2: 3.0}
    define_gradients(p, lambda argnum, ans, x, y: lambda g: g * weights[argnum], [1, 2])
    assert grad(lambda x: p(x, 1.0))(0.0) == 2.0
    assert grad(lambda y: p(1.0, y), 1)(0.0) == 3.0


def test_registration_is_additive():
    p = Primitive(lambda x, y: x + y, name="plus")
    p.defgrad(lambda ans, x, y: lambda g: g, argnum=1)
    p.defgrad(lambda ans, x, y: lambda g: g, argnum=2)
    assert set(p.grads) == {1, 2}
    with pytest.raises(ValueError):
        p.defgrad(lambda ans, x, y: lambda g: g, argnum=0)


def test_unreached_start_gives_zero():
    # output lives on the tape but has no path back to the argument
    def f(x):
        (tape,) = active_tapes()
        return sin(Node(2.0, [tape]))

    with pytest.warns(IndependentOutputWarning):
        assert grad(f)(1.0) == 0.0


def test_stop_gradient_primitive():
    stop = Primitive(lambda x: x, name="stop_gradient")
    stop.defgrad_is_zero()

    def f(x):
        return sin(stop(x)) + x * 3.0

    assert grad(f)(1.0) == 3.0


def test_zeros_like():
    assert zeros_like(3.0) == 0.0
    z = zeros_like(np.arange(3))
    assert z.dtype == np.float64 and z.shape == (3,) and not z.any()
    t = Tape()
    assert zeros_like(Node(2.0, [t])) == 0.0


def test_type_check_catches_bad_gradient_shape():
    bad = Primitive(lambda x: 2.0 * x, name="bad")
    bad.defgrad(lambda ans, x: lambda g: np.array([g, g]))
    assert np.allclose(grad(lambda x: bad(x))(1.0), [1.0, 1.0])
    with use_config(check_types=True):
        with pytest.raises(GradientTypeError):
            grad(lambda x: bad(x))(1.0)


def test_unknown_config_option():
    with pytest.raises(ValueError):
        with use_config(no_such_option=True):
            pass


def test_graph_stats_and_printing(capsys):
    start, end, tape = forward_pass(lambda x: sin(x) * cos(x), (0.3,), {}, 1)
    stats = get_graph_stats(tape)
    # start, merged argument, sin, cos, mul
    assert stats['records'] == 5
    assert stats['edges'] == 5
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 2
    assert stats['complete'] is False

    print_graph_summary(tape)
    print_computation_graph(tape)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "[leaf/input]" in out

    backward_pass(start, end, tape)
    assert get_graph_stats(tape)['complete'] is True
    assert get_graph_stats(Tape())['records'] == 0


def test_primitive_decorator():
    from tapegrad import primitive

    @primitive
    def cube(x):
        return x ** 3

    cube.defgrad(lambda ans, x: lambda g: g * 3.0 * x * x)
    assert isinstance(cube, Primitive)
    assert cube(2.0) == 8.0
    assert grad(cube)(2.0) == 12.0
