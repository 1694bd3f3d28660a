"""
Global test configuration and fixtures
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from codegraph_leakscan.config import LeakScanSettings

TEST_MODULE_RULES = {
    "com.acme.billing": "billing",
    "com.acme": "core",
}


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs reconfigure logging against captured streams; undo that after each test."""
    yield
    structlog.reset_defaults()
    logging.basicConfig(level=logging.WARNING, force=True)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's LEAKSCAN_* variables and .env out of the tests."""
    for name in list(os.environ):
        if name.startswith("LEAKSCAN_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def source_root(tmp_path) -> Path:
    """Empty Java source root."""
    root = tmp_path / "src" / "main" / "java"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def write_java(source_root) -> Callable[[str, str], Path]:
    """
    Write a Java file below the source root.

    Example:
        write_java("com/acme/Student.java", "package com.acme; class Student {}")
    """

    def _write(relative: str, content: str) -> Path:
        path = source_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(source_root, tmp_path) -> LeakScanSettings:
    """Settings pointing at the temporary source root with small module rules."""
    return LeakScanSettings(
        source_root=source_root,
        output_file=tmp_path / "out" / "violations.json",
        module_rules=TEST_MODULE_RULES,
    )


STUDENT_ENTITY = """\
package com.acme.billing.domain;

import jakarta.persistence.Entity;

@Entity
public class Student {
    private Long id;
}
"""

PROFESSOR_ENTITY = """\
package com.acme.billing.domain;

@jakarta.persistence.Entity
public class Professor {
    private String name;
}
"""

STUDENT_RESOURCE = """\
package com.acme.billing.web;

import com.acme.billing.domain.Student;
import org.springframework.web.bind.annotation.*;
import java.util.List;

@RestController
@RequestMapping("/api")
public class StudentResource {

    @GetMapping("/students")
    public List<Student> getAll() {
        return List.of();
    }

    @PostMapping(value = "students")
    public ResponseEntity<Void> create(@RequestBody Student student, @PathVariable Long id) {
        return null;
    }

    @PutMapping({"/students/{id}", "/pupils/{id}"})
    public void upload(@RequestPart("file") Student[] students) {
    }

    public Student helper(@RequestBody Student student) {
        return student;
    }
}
"""

STUDENT_DTO = """\
package com.acme.core.dto;

import com.acme.billing.domain.Professor;
public record StudentDTO(Professor advisor, String name) {}
"""


@pytest.fixture
def sample_tree(write_java) -> None:
    """Two entities, one controller and one DTO record."""
    write_java("com/acme/billing/domain/Student.java", STUDENT_ENTITY)
    write_java("com/acme/billing/domain/Professor.java", PROFESSOR_ENTITY)
    write_java("com/acme/billing/web/StudentResource.java", STUDENT_RESOURCE)
    write_java("com/acme/core/dto/StudentDTO.java", STUDENT_DTO)
