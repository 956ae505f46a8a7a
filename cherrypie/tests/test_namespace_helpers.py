# Copyright (c) 2013-2025 NASK. All rights reserved.

import collections
import pickle
import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
)

from cherrypie.namespace_helpers import (
    ABSENT,
    is_present,
    lookup,
    resolve,
    wrap_in_namespace,
)
from cherrypie.tests._generic_helpers import (
    CustomMapping,
    TestCaseMixin,
)


ORIGIN = {
    'session': {
        'user': {
            'name': 'Bruce Wayne',
            'nickname': 'Batman',
            'pets': ['Bat-Cat', 'Bat-Dog'],
            'favourites': {
                'food': 'T-Bone Steak',
                'car': 'Batmobil',
            },
            'mood': {
                'currentStatus': 'angry',
                'level': 0,
                'comment': '',
                'reason': None,
            },
        },
    },
    'session.user': 'literally dotted key',
}


class TestAbsent(unittest.TestCase):

    def test_singleton(self):
        self.assertIs(type(ABSENT)(), ABSENT)
        self.assertIs(pickle.loads(pickle.dumps(ABSENT)), ABSENT)

    def test_falsy(self):
        self.assertFalse(ABSENT)

    def test_repr(self):
        self.assertEqual(repr(ABSENT), '<ABSENT>')


@expand
class Test_is_present(unittest.TestCase):

    @foreach(
        param(value='x', policy='existence', expected=True),
        param(value=0, policy='existence', expected=True),
        param(value='', policy='existence', expected=True),
        param(value=None, policy='existence', expected=True),
        param(value=[], policy='existence', expected=True),
        param(value=ABSENT, policy='existence', expected=False),
        param(value='x', policy='truthiness', expected=True),
        param(value=0, policy='truthiness', expected=False),
        param(value='', policy='truthiness', expected=False),
        param(value=None, policy='truthiness', expected=False),
        param(value=[], policy='truthiness', expected=False),
        param(value=ABSENT, policy='truthiness', expected=False),
    )
    def test(self, value, policy, expected):
        self.assertIs(is_present(value, policy), expected)


@expand
class Test_lookup(unittest.TestCase):

    @foreach(
        param(container={'a': 1}, key='a', expected=1),
        param(container={'a': None}, key='a', expected=None),
        param(container={'a': 1}, key='b', expected=ABSENT),
        param(container={1: 'one'}, key=1, expected='one'),
        param(container={'a': 1}, key=['unhashable'], expected=ABSENT),
        param(container=CustomMapping(a=1), key='a', expected=1),
        param(container=['x', 'y'], key='0', expected='x'),
        param(container=['x', 'y'], key=1, expected='y'),
        param(container=('x', 'y'), key='1', expected='y'),
        param(container=['x', 'y'], key='2', expected=ABSENT),
        param(container=['x', 'y'], key='-1', expected=ABSENT),
        param(container=['x', 'y'], key='first', expected=ABSENT),
        param(container=['x', 'y'], key=True, expected=ABSENT),
        param(container='xy', key='0', expected=ABSENT),
        param(container=b'xy', key='0', expected=ABSENT),
        param(container=42, key='a', expected=ABSENT),
        param(container=None, key='a', expected=ABSENT),
    )
    def test(self, container, key, expected):
        self.assertEqual(lookup(container, key), expected)

    def test_defaultdict_not_modified(self):
        container = collections.defaultdict(list)
        result = lookup(container, 'a')
        self.assertIs(result, ABSENT)
        self.assertEqual(container, {})

    def test_truthiness_policy(self):
        self.assertIs(lookup({'a': 0}, 'a', 'truthiness'), ABSENT)
        self.assertEqual(lookup({'a': 0}, 'a', 'existence'), 0)


@expand
class Test_resolve(TestCaseMixin, unittest.TestCase):

    @foreach(
        param(path='session', expected=ORIGIN['session']).label('single segment'),
        param(path='session.user.name', expected='Bruce Wayne'),
        param(path='session.user.favourites.car', expected='Batmobil'),
        param(path='session.user.pets.1', expected='Bat-Dog').label('sequence index'),
        param(path='session.user.mood.level', expected=0),
        param(path='session.user.mood.comment', expected=''),
        param(path='session.user.mood.reason', expected=None),
        param(path='session.customer.name', expected=ABSENT).label('hole in the middle'),
        param(path='session.user.name.first', expected=ABSENT).label('walking into a str'),
        param(path='session.user.mood.reason.x', expected=ABSENT).label('walking into None'),
        param(path='session.user.pets.2', expected=ABSENT),
        param(path='nothing', expected=ABSENT),
        param(path='', expected=ABSENT),
    )
    def test_existence_policy(self, path, expected):
        result = self.assertNotModified(resolve, ORIGIN, path)
        self.assertEqualIncludingTypes(result, expected)

    @foreach(
        param(path='session.user.name', expected='Bruce Wayne'),
        param(path='session.user.mood.level', expected=ABSENT),
        param(path='session.user.mood.comment', expected=ABSENT),
        param(path='session.user.mood.reason', expected=ABSENT),
    )
    def test_truthiness_policy(self, path, expected):
        result = resolve(ORIGIN, path, presence_policy='truthiness')
        self.assertEqualIncludingTypes(result, expected)

    def test_walking_stops_at_first_hole(self):
        origin = {'a': {}}
        with patch('cherrypie.namespace_helpers.lookup', wraps=lookup) as lookup_mock:
            result = resolve(origin, 'a.b.c.d')
        self.assertIs(result, ABSENT)
        self.assertEqual(lookup_mock.call_count, 2)

    def test_custom_separator(self):
        self.assertEqual(resolve(ORIGIN, 'session/user/nickname', separator='/'), 'Batman')
        self.assertEqual(resolve(ORIGIN, 'session.user', separator='/'),
                         'literally dotted key')

    def test_non_mapping_origins(self):
        self.assertIs(resolve(None, 'a.b'), ABSENT)
        self.assertIs(resolve('abc', 'a'), ABSENT)
        self.assertEqual(resolve([{'a': 'b'}], '0.a'), 'b')

    def test_idempotent(self):
        first = resolve(ORIGIN, 'session.user.favourites')
        second = resolve(ORIGIN, 'session.user.favourites')
        self.assertIs(first, second)


@expand
class Test_wrap_in_namespace(TestCaseMixin, unittest.TestCase):

    @foreach(
        param(namespace='a', value={'x': 1}, expected={'a': {'x': 1}}),
        param(namespace='a.b.c', value={'x': 1}, expected={'a': {'b': {'c': {'x': 1}}}}),
        param(namespace='a.b', value=[{'x': 1}], expected={'a': {'b': [{'x': 1}]}}),
        param(namespace='a.b', value={}, expected={'a': {'b': {}}}),
        param(namespace='a.b', value=None, expected={'a': {'b': {}}}),
        param(namespace='a.b', value='scalar', expected={'a': {'b': {}}}),
        param(namespace='a.b', value=ABSENT, expected={'a': {'b': {}}}),
    )
    def test(self, namespace, value, expected):
        self.assertEqualIncludingTypes(wrap_in_namespace(namespace, value), expected)

    def test_value_placed_as_is(self):
        value = {'x': 1}
        result = wrap_in_namespace('a.b', value)
        self.assertIs(result['a']['b'], value)

    def test_custom_separator(self):
        self.assertEqual(wrap_in_namespace('a/b', {'x': 1}, separator='/'),
                         {'a': {'b': {'x': 1}}})

    @foreach(
        param(namespace=None),
        param(namespace=42),
        param(namespace=['a', 'b']),
    )
    def test_non_str_namespace(self, namespace):
        self.assertIsNone(wrap_in_namespace(namespace, {'x': 1}))
