# Copyright (c) 2013-2025 NASK. All rights reserved.

import unittest
from unittest.mock import patch

from unittest_expander import (
    expand,
    foreach,
    param,
    paramseq,
)

from cherrypie.config import MolderSettings
from cherrypie.description import ModelDescription
from cherrypie.desolator import Desolator
from cherrypie.exceptions import (
    SchemaError,
    SerializationError,
)
from cherrypie.populator import Populator
from cherrypie.tests._generic_helpers import (
    CustomMapping,
    TestCaseMixin,
)


def authors_count(context):
    return len(context.model['authors'])


BOOK_MODEL = {
    'id': 'a0123',
    'title': 'Design Patterns',
    'subTitle': 'Elements of Reusable Object-Oriented Software',
    'authors': [
        {'id': 'asdf1234', 'name': 'Erich Gamma'},
        {'id': 'asdf1235', 'name': 'Richard Helm'},
        {'id': 'asdf1236', 'name': 'Ralph Johnson'},
        {'id': 'asdf1237', 'name': 'John Vlissides'},
    ],
}


@expand
class TestDesolator_serialize(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.desolator = Desolator()

    @paramseq
    def cases(cls):
        description = {
            'id': 'serverId',
            'text': 'serverText',
        }

        yield param(
            description=description,
            model={'id': 'a0123', 'text': 'An incredible sensation!'},
            names=['id', 'text'],
            expected={'serverId': 'a0123', 'serverText': 'An incredible sensation!'},
        ).label('single model')

        yield param(
            description=description,
            model=[
                {'id': 'a1', 'text': 'Killed'},
                {'id': 'b2', 'text': 'By'},
                {'id': 'c3', 'text': 'Death'},
            ],
            names=['id', 'text'],
            expected=[
                {'serverId': 'a1', 'serverText': 'Killed'},
                {'serverId': 'b2', 'serverText': 'By'},
                {'serverId': 'c3', 'serverText': 'Death'},
            ],
        ).label('list of models')

        yield param(
            description=description,
            model=[
                {'id': 'a1', 'text': 'Killed'},
                {'id': 'b2', 'text': 'By'},
                {'id': 'c3', 'text': 'Death'},
            ],
            names=['text'],
            expected=[
                {'serverText': 'Killed'},
                {'serverText': 'By'},
                {'serverText': 'Death'},
            ],
        ).label('list of models, some names')

        yield param(
            description=description,
            model={'id': 'a0123', 'text': 'An incredible sensation!', 'extra': 42},
            names={'id', 'extra'},
            expected={'serverId': 'a0123'},
        ).label('name not declared in description is skipped')

        yield param(
            description=description,
            model={'id': 'a0123'},
            names=['id', 'text'],
            expected={'serverId': 'a0123'},
        ).label('name not present in model is skipped')

        yield param(
            description=description,
            model={'id': None, 'text': ''},
            names=['id', 'text'],
            expected={'serverId': None, 'serverText': ''},
        ).label('falsy values serialized')

        yield param(
            description=description,
            model=[],
            names=['id'],
            expected={},
        ).label('empty list')

        yield param(
            description=description,
            model=None,
            names=['id'],
            expected={},
        ).label('None')

        yield param(
            description=description,
            model=CustomMapping(id='a0123'),
            names=['id'],
            expected={'serverId': 'a0123'},
        ).label('non-dict mapping')

        yield param(
            description={'greet': lambda context: 'hello', 'id': 'serverId'},
            model={'greet': 'hello', 'id': 'a0123'},
            names=['greet', 'id'],
            expected={'serverId': 'a0123'},
        ).label('computed field is skipped')

    @foreach(cases)
    def test(self, description, model, names, expected):
        result = self.assertNotModified(self.desolator.serialize, description, model, names)
        self.assertEqualIncludingTypes(result, expected)

    def test_truthiness_policy(self):
        desolator = Desolator(MolderSettings(presence_policy='truthiness'))
        result = desolator.serialize(
            {'id': 'serverId', 'text': 'serverText'},
            {'id': 'a0123', 'text': ''},
            ['id', 'text'])
        self.assertEqual(result, {'serverId': 'a0123'})

    @patch('cherrypie.desolator.LOGGER')
    def test_skipped_name_logged(self, LOGGER_mock):
        self.desolator.serialize({'id': 'serverId'}, {'id': 1, 'extra': 2}, ['id', 'extra'])
        self.assertEqual(LOGGER_mock.debug.call_count, 1)


@expand
class TestDesolator_desolate(TestCaseMixin, unittest.TestCase):

    def setUp(self):
        self.desolator = Desolator()

    @paramseq
    def cases(cls):
        yield param(
            description={
                '__namespace': 'session.user',
                'firstName': 'firstName',
                'lastName': 'lastName',
                '__serializable': ['firstName', 'lastName'],
            },
            model={
                'name': 'Bruce Wayne',
                'firstName': 'Bruce',
                'lastName': 'Wayne',
            },
            expected={
                'session': {
                    'user': {'firstName': 'Bruce', 'lastName': 'Wayne'},
                },
            },
        ).label('serializable directive')

        yield param(
            description={
                '__namespace': 'session.user',
                'firstName': 'firstName',
                'lastName': 'lastName',
            },
            model={
                'name': 'Bruce Wayne',
                'firstName': 'Bruce',
                'lastName': 'Wayne',
            },
            expected={
                'session': {
                    'user': {'firstName': 'Bruce', 'lastName': 'Wayne'},
                },
            },
        ).label('no serializable directive')

        yield param(
            description={
                '__namespace': 'awesome',
                'id': 'serverId',
                'text': 'serverText',
                '__serializable': ['id', 'text'],
            },
            model={
                'id': 'a0123',
                'text': 'An incredible sensation!',
            },
            expected={
                'awesome': {
                    'serverId': 'a0123',
                    'serverText': 'An incredible sensation!',
                },
            },
        ).label('simple model')

        yield param(
            description={
                'id': 'serverId',
                'text': 'serverText',
            },
            model={
                'id': 'a0123',
                'text': 'An incredible sensation!',
            },
            expected={
                'serverId': 'a0123',
                'serverText': 'An incredible sensation!',
            },
        ).label('no namespace')

        yield param(
            description={
                '__namespace': 'awesome',
                'id': 'serverId',
                'text': 'serverText',
                'author': 'serverAuthor',
                '__children': {
                    'author': {
                        'id': 'authorId',
                        'name': 'authorName',
                        '__serializable': ['id', 'name'],
                    },
                },
                '__serializable': ['id', 'text', 'author'],
            },
            model={
                'id': 'a0123',
                'text': 'An incredible sensation!',
                'author': {'id': 'asdf1234', 'name': 'Roger Penrose'},
            },
            expected={
                'awesome': {
                    'serverId': 'a0123',
                    'serverText': 'An incredible sensation!',
                    'serverAuthor': {
                        'authorId': 'asdf1234',
                        'authorName': 'Roger Penrose',
                    },
                },
            },
        ).label('child model')

        yield param(
            description={
                '__namespace': 'book',
                'id': 'bookId',
                'title': 'bookTitle',
                'subTitle': 'bookSubTitle',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {
                        'id': 'authorId',
                        'name': 'authorName',
                        '__serializable': ['id', 'name'],
                    },
                },
                '__serializable': ['id', 'title', 'subTitle', 'authors'],
            },
            model=BOOK_MODEL,
            expected={
                'book': {
                    'bookId': 'a0123',
                    'bookTitle': 'Design Patterns',
                    'bookSubTitle': 'Elements of Reusable Object-Oriented Software',
                    'bookAuthors': [
                        {'authorId': 'asdf1234', 'authorName': 'Erich Gamma'},
                        {'authorId': 'asdf1235', 'authorName': 'Richard Helm'},
                        {'authorId': 'asdf1236', 'authorName': 'Ralph Johnson'},
                        {'authorId': 'asdf1237', 'authorName': 'John Vlissides'},
                    ],
                },
            },
        ).label('child models list')

        yield param(
            description={
                '__namespace': 'book',
                'id': 'bookId',
                'title': 'bookTitle',
                'subTitle': 'bookSubTitle',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {
                        'id': 'authorId',
                        'name': 'authorName',
                        '__serializable': ['id', 'name'],
                    },
                },
                '__serializable': ['id', 'title', 'subTitle'],
            },
            model=BOOK_MODEL,
            expected={
                'book': {
                    'bookId': 'a0123',
                    'bookTitle': 'Design Patterns',
                    'bookSubTitle': 'Elements of Reusable Object-Oriented Software',
                },
            },
        ).label('child not serializable')

        yield param(
            description={
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {
                        '__namespace': 'person',
                        'name': 'fullName',
                    },
                },
            },
            model={
                'id': 'a0123',
                'authors': {'name': 'Erich Gamma'},
            },
            expected={
                'bookId': 'a0123',
                'bookAuthors': {'person': {'fullName': 'Erich Gamma'}},
            },
        ).label('child with its own namespace')

        yield param(
            description={
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {'name': 'authorName'},
                },
            },
            model={'id': 'a0123'},
            expected={'bookId': 'a0123', 'bookAuthors': {}},
        ).label('child absent from model')

        yield param(
            description={
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {'__namespace': 'person', 'name': 'fullName'},
                },
            },
            model={'id': 'a0123'},
            expected={'bookId': 'a0123', 'bookAuthors': {'person': {}}},
        ).label('child with its own namespace absent from model')

        yield param(
            description={
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {'name': 'authorName'},
                },
            },
            model=None,
            expected={},
        ).label('non-mapping model with children')

        yield param(
            description={
                '__namespace': 'books',
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {'name': 'authorName'},
                },
            },
            model=[
                {'id': 'a1', 'authors': [{'name': 'Erich Gamma'}]},
                {'id': 'b2', 'authors': [{'name': 'Ralph Johnson'}], 'extra': 1},
            ],
            expected={
                'books': [
                    {'bookId': 'a1', 'bookAuthors': [{'authorName': 'Erich Gamma'}]},
                    {'bookId': 'b2', 'bookAuthors': [{'authorName': 'Ralph Johnson'}]},
                ],
            },
        ).label('list of models with children')

        yield param(
            description={
                '__namespace': 'a.b',
                'id': 'serverId',
            },
            model={},
            expected={'a': {'b': {}}},
        ).label('empty model')

    @foreach(cases)
    def test(self, description, model, expected):
        result = self.assertNotModified(self.desolator.desolate, description, model)
        self.assertEqualIncludingTypes(result, expected)

    @foreach(cases)
    def test_with_model_description_instance(self, description, model, expected):
        result = self.desolator.desolate(ModelDescription.from_mapping(description), model)
        self.assertEqual(result, expected)

    def test_computed_field_without_serializable_directive(self):
        description = {
            '__namespace': 'session.user',
            'firstName': 'firstName',
            'lastName': 'lastName',
            'greet': lambda context: 'Hello!',
        }
        model = {'firstName': 'Bruce', 'lastName': 'Wayne', 'greet': 'Hello!'}
        with self.assertRaises(SerializationError) as cm:
            self.desolator.desolate(description, model)
        self.assertEqual(cm.exception.field_names, {'greet'})
        self.assertEqual(cm.exception.namespace, 'session.user')

    def test_computed_field_in_serializable_directive(self):
        description = {
            '__namespace': 'book',
            'id': 'bookId',
            'authors': 'bookAuthors',
            '__children': {
                'authors': {'id': 'authorId', 'name': 'authorName'},
            },
            'authorsCount': authors_count,
            '__serializable': ['id', 'authorsCount'],
        }
        with self.assertRaises(SerializationError) as cm:
            self.desolator.desolate(description, dict(BOOK_MODEL, authorsCount=4))
        self.assertEqual(cm.exception.field_names, {'authorsCount'})
        self.assertIn('"authorsCount"', str(cm.exception))
        self.assertIn('book', str(cm.exception))

    def test_computed_field_not_serializable_is_fine(self):
        description = {
            'id': 'bookId',
            'authorsCount': authors_count,
            '__serializable': ['id'],
        }
        result = self.desolator.desolate(description, {'id': 'a0123', 'authorsCount': 4})
        self.assertEqual(result, {'bookId': 'a0123'})

    def test_computed_field_in_child_description(self):
        description = {
            'authors': 'bookAuthors',
            '__children': {
                'authors': {'name': 'authorName', 'initials': lambda context: 'EG'},
            },
        }
        with self.assertRaises(SerializationError):
            self.desolator.desolate(description, {'authors': [{'name': 'Erich Gamma'}]})

    def test_malformed_description(self):
        with self.assertRaises(SchemaError):
            self.desolator.desolate({'id': 42}, {'id': 1})

    def test_custom_settings(self):
        desolator = Desolator(MolderSettings(path_separator='/', meta_key_prefix='$'))
        result = desolator.desolate({'$namespace': 'a/b', 'id': 'serverId'}, {'id': 1})
        self.assertEqual(result, {'a': {'b': {'serverId': 1}}})


@expand
class TestRoundTrip(unittest.TestCase):

    @foreach(
        param(
            description={
                'id': 'commentId',
                'text': 'commentText',
            },
            origin={
                'commentId': 'a01',
                'commentText': 'some comment',
                'unknown': 'junk',
            },
            expected={
                'commentId': 'a01',
                'commentText': 'some comment',
            },
        ).label('flat'),
        param(
            description={
                '__namespace': 'book',
                'id': 'bookId',
                'authors': 'bookAuthors',
                '__children': {
                    'authors': {'id': 'authorId', 'name': 'authorName'},
                },
            },
            origin={
                'book': {
                    'bookId': 'a0123',
                    'bookAuthors': [
                        {'authorId': 'asdf1234', 'authorName': 'Erich Gamma', 'x': 1},
                        {'authorId': 'asdf1235', 'authorName': 'Richard Helm'},
                    ],
                    'unknown': 'junk',
                },
            },
            expected={
                'book': {
                    'bookId': 'a0123',
                    'bookAuthors': [
                        {'authorId': 'asdf1234', 'authorName': 'Erich Gamma'},
                        {'authorId': 'asdf1235', 'authorName': 'Richard Helm'},
                    ],
                },
            },
        ).label('with namespace and children'),
    )
    def test(self, description, origin, expected):
        model = Populator().populate(description, origin)
        result = Desolator().desolate(description, model)
        self.assertEqual(result, expected)
