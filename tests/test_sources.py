from goscope.sources import scan_sources


def test_scan_skips_vcs_and_vendor(sample_go_project):
    scan = scan_sources(sample_go_project)

    assert scan.go_files == [
        "cmd/shop/main.go",
        "store/broken.go",
        "store/helpers.go",
        "store/store.go",
    ]
    assert scan.stats.total_files == 6
    assert scan.stats.go_files == 4
    assert scan.stats.non_go_files == 2
    assert scan.stats.test_files == 0
    assert scan.stats.directories == 3


def test_directory_tree_directories_first(make_go_project):
    project = make_go_project(
        {
            "b.go": "package p\n",
            "a.txt": "",
            "zdir/x_test.go": "package p\n",
            "adir/y.go": "package p\n",
        }
    )
    scan = scan_sources(project)

    assert scan.tree.name == "proj"
    assert [c.name for c in scan.tree.children] == ["adir", "zdir", "a.txt", "b.go"]
    assert scan.stats.test_files == 1


def test_extra_exclusions(make_go_project):
    project = make_go_project(
        {
            "main.go": "package main\n",
            "testdata/fixture.go": "package broken(\n",
        }
    )
    scan = scan_sources(project, exclude=["testdata"])

    assert scan.go_files == ["main.go"]
    assert [c.name for c in scan.tree.children] == ["main.go"]
