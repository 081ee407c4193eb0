import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from sourcify_verify.helpers import paths
from sourcify_verify.helpers.util import VerificationError


class NormaliseContractPathTests(unittest.TestCase):
    def setUp(self):
        self.options = SimpleNamespace(project_dir="/home/dev/metacoin")

    def test_project_prefix_is_replaced_by_project_dir(self):
        with mock.patch.object(paths.sys, "platform", "linux"):
            result = paths.normalise_contract_path("project:/contracts/MetaCoin.sol", self.options)
        self.assertEqual(result, os.path.join("/home/dev/metacoin", "contracts/MetaCoin.sol"))

    def test_unix_paths_are_unchanged_off_windows(self):
        for platform in ("linux", "darwin"):
            with mock.patch.object(paths.sys, "platform", platform):
                self.assertEqual(
                    paths.normalise_contract_path("/D/Hello/World.sol", self.options),
                    "/D/Hello/World.sol",
                )
                self.assertEqual(
                    paths.normalise_contract_path("@openzeppelin/contracts/access/Ownable.sol", self.options),
                    "@openzeppelin/contracts/access/Ownable.sol",
                )

    def test_unixified_windows_path_gets_drive_letter(self):
        with mock.patch.object(paths.sys, "platform", "win32"):
            result = paths.normalise_contract_path("/D/Foo/Bar.sol", self.options)
        self.assertEqual(result, "D:\\Foo\\Bar.sol")

    def test_lowercase_drive_letter_is_accepted(self):
        with mock.patch.object(paths.sys, "platform", "win32"):
            result = paths.normalise_contract_path("/c/Foo/Bar.sol", self.options)
        self.assertEqual(result, "c:\\Foo\\Bar.sol")

    def test_other_paths_pass_through_on_windows(self):
        with mock.patch.object(paths.sys, "platform", "win32"):
            for path in ("/Dev/Foo/Bar.sol", "@openzeppelin/contracts/token/ERC20.sol", "D:\\Foo\\Bar.sol"):
                self.assertEqual(paths.normalise_contract_path(path, self.options), path)


class ProjectPrefixTests(unittest.TestCase):
    def test_get_absolute_path_ignores_unprefixed_paths(self):
        options = SimpleNamespace(project_dir="/work")
        self.assertEqual(paths.get_absolute_path("/abs/Token.sol", options), "/abs/Token.sol")

    def test_strip_project_prefix(self):
        self.assertEqual(paths.strip_project_prefix("project:/contracts/A.sol"), "/contracts/A.sol")
        self.assertEqual(paths.strip_project_prefix("/contracts/A.sol"), "/contracts/A.sol")


class ResolveSourcePathTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "contracts").mkdir()
        (self.root / "contracts" / "A.sol").write_text("contract A {}", encoding="utf-8")
        package_dir = self.root / "node_modules" / "@openzeppelin" / "contracts"
        package_dir.mkdir(parents=True)
        (package_dir / "Ownable.sol").write_text("contract Ownable {}", encoding="utf-8")
        self.options = SimpleNamespace(project_dir=str(self.root / "contracts"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_existing_file(self):
        resolved = paths.resolve_source_path(str(self.root / "contracts" / "A.sol"), self.options)
        self.assertEqual(resolved.read_text(encoding="utf-8"), "contract A {}")

    def test_package_import_is_found_in_parent_node_modules(self):
        resolved = paths.resolve_source_path("@openzeppelin/contracts/Ownable.sol", self.options)
        self.assertEqual(resolved.name, "Ownable.sol")
        self.assertIn("node_modules", resolved.parts)

    def test_missing_file_raises(self):
        with self.assertRaises(VerificationError) as cm:
            paths.resolve_source_path(str(self.root / "contracts" / "Missing.sol"), self.options)
        self.assertIn("Missing.sol", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
