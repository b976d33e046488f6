"""Tests for the get command and CLI entry point."""

import io
import json
import os
import shutil
import tempfile
from argparse import Namespace
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

import yaml

from envscope.cli.commands.get import build_request, write_records
from envscope.cli.main import create_parser, main
from envscope.types import RawRecord, Scope, StructuredRecord, ValueKind


class TestGetCommand(TestCase):
    """End-to-end runs of `envscope get` against file-backed stores."""

    def setUp(self):
        """Set up store files and a controlled environment."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.user_store = self.test_dir / 'user.yaml'
        self.machine_store = self.test_dir / 'machine.yaml'

        self.user_store.write_text(
            "EDITOR: vim\n"
            "HOSTS: alpha,beta,gamma\n"
            "Path:\n"
            "  kind: expand_string\n"
            f"  value: /home/me/bin{os.pathsep}/opt/bin\n"
        )
        self.machine_store.write_text("LANG: en_US.UTF-8\n")

        self.env_patch = patch.dict(os.environ, {
            'ENVSCOPE_BACKEND': 'file',
            'ENVSCOPE_USER_STORE': str(self.user_store),
            'ENVSCOPE_MACHINE_STORE': str(self.machine_store),
            'ENVSCOPE_GREETING': 'hello world',
        })
        self.env_patch.start()

    def tearDown(self):
        """Clean up test environment."""
        self.env_patch.stop()
        shutil.rmtree(self.test_dir)

    def run_cli(self, *args):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            exit_code = main(['get', *args])
        return exit_code, stdout.getvalue()

    def test_raw_process_variable(self):
        exit_code, output = self.run_cli('ENVSCOPE_GREETING', '--raw')

        self.assertEqual(exit_code, 0)
        self.assertEqual(output, 'hello world\n')

    def test_structured_yaml_output(self):
        exit_code, output = self.run_cli('HOSTS', '--scope', 'user', '--delimiter', ',')

        self.assertEqual(exit_code, 0)
        self.assertEqual(yaml.safe_load(output), [
            {'name': 'HOSTS', 'kind': 'string', 'value': ['alpha', 'beta', 'gamma']}
        ])

    def test_structured_json_output(self):
        exit_code, output = self.run_cli('Path', '--scope', 'user', '--format', 'json')

        self.assertEqual(exit_code, 0)
        self.assertEqual(json.loads(output), [
            {'name': 'Path', 'kind': 'expand_string', 'value': ['/home/me/bin', '/opt/bin']}
        ])

    def test_enumerate_user_scope(self):
        exit_code, output = self.run_cli('--scope', 'user', '--format', 'json')

        self.assertEqual(exit_code, 0)
        records = json.loads(output)
        self.assertEqual([record['name'] for record in records], ['EDITOR', 'HOSTS', 'Path'])
        self.assertEqual(records[1]['value'], 'alpha,beta,gamma')

    def test_enumerate_process_scope(self):
        exit_code, output = self.run_cli('--format', 'json')

        self.assertEqual(exit_code, 0)
        records = {record['name']: record for record in json.loads(output)}
        self.assertEqual(records['ENVSCOPE_GREETING'], {'name': 'ENVSCOPE_GREETING', 'value': 'hello world'})

    def test_missing_variable_exits_1(self):
        exit_code, output = self.run_cli('MISSING', '--scope', 'machine', '--quiet')

        self.assertEqual(exit_code, 1)
        self.assertEqual(output, '')

    def test_raw_without_name_exits_2(self):
        exit_code, output = self.run_cli('--raw', '--quiet')

        self.assertEqual(exit_code, 2)
        self.assertEqual(output, '')

    def test_raw_with_delimiter_exits_2(self):
        exit_code, _ = self.run_cli('EDITOR', '--raw', '--delimiter', ';', '--quiet')

        self.assertEqual(exit_code, 2)

    def test_malformed_store_exits_2(self):
        self.machine_store.write_text("- not\n- a mapping\n")

        exit_code, _ = self.run_cli('LANG', '--scope', 'machine', '--quiet')

        self.assertEqual(exit_code, 2)

    def test_unknown_backend_exits_2(self):
        with patch.dict(os.environ, {'ENVSCOPE_BACKEND': 'etcd'}):
            exit_code, _ = self.run_cli('EDITOR', '--quiet')

        self.assertEqual(exit_code, 2)

    def test_registry_backend_off_windows_exits_2(self):
        with patch.dict(os.environ, {'ENVSCOPE_BACKEND': 'registry'}), \
                patch('envscope.config.sys.platform', 'linux'):
            exit_code, _ = self.run_cli('EDITOR', '--scope', 'user', '--quiet')

        self.assertEqual(exit_code, 2)

    def test_value_error_during_resolve_is_unexpected(self):
        with patch('envscope.cli.commands.get.VariableResolver.resolve', side_effect=ValueError('bad value')), \
                self.assertLogs('envscope.cli.commands.get', level='ERROR') as logs:
            exit_code, _ = self.run_cli('EDITOR')

        self.assertEqual(exit_code, 1)
        self.assertIn('Unexpected error: bad value', logs.output[0])
        self.assertNotIn('Configuration error', logs.output[0])

    def test_unexpected_error_exits_1(self):
        with patch('envscope.cli.commands.get.VariableResolver.resolve', side_effect=RuntimeError('boom')):
            exit_code, _ = self.run_cli('EDITOR', '--quiet')

        self.assertEqual(exit_code, 1)

    def test_no_command_prints_help(self):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            exit_code = main([])

        self.assertEqual(exit_code, 1)
        self.assertIn('usage', stdout.getvalue())


class TestRequestBuilding(TestCase):
    """Argument parsing into resolve requests."""

    def test_defaults(self):
        args = create_parser().parse_args(['get'])
        request = build_request(args)

        self.assertIsNone(request.name)
        self.assertEqual(request.scope, Scope.PROCESS)
        self.assertIsNone(request.delimiter)
        self.assertFalse(request.raw)

    def test_all_options(self):
        args = create_parser().parse_args(['get', 'Path', '--scope', 'machine', '--delimiter', ';'])
        request = build_request(args)

        self.assertEqual(request.name, 'Path')
        self.assertEqual(request.scope, Scope.MACHINE)
        self.assertEqual(request.delimiter, ';')

    def test_empty_name_enumerates(self):
        request = build_request(Namespace(name='', scope='user', delimiter=None, raw=False))

        self.assertTrue(request.is_enumeration)


class TestWriteRecords(TestCase):
    """Record serialization."""

    def test_raw_records_one_per_line(self):
        stream = io.StringIO()

        write_records([RawRecord('a:b')], stream=stream)

        self.assertEqual(stream.getvalue(), 'a:b\n')

    def test_yaml_keeps_field_order(self):
        stream = io.StringIO()

        write_records([StructuredRecord('X', ('1', '2'), ValueKind.STRING)], stream=stream)

        self.assertEqual(stream.getvalue(), "- name: X\n  kind: string\n  value:\n  - '1'\n  - '2'\n")

    def test_empty_enumeration(self):
        stream = io.StringIO()

        write_records([], output_format='json', stream=stream)

        self.assertEqual(json.loads(stream.getvalue()), [])
