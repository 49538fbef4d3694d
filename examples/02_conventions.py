"""
Example 02: Conventions, Pairing and Custom Construction

This example demonstrates naming conventions, overriding which side owns a
many-to-many join table, and constructing mappings through a factory.
"""

import logging
from dataclasses import dataclass

from rowmap import ClassMap, Configuration, FluentMappingsContainer
from rowmap.conventions import ForeignKey, ManyToManyTable, TableName


@dataclass
class Student:
    """Student entity"""
    id: int
    name: str


@dataclass
class Course:
    """Course entity"""
    id: int
    title: str


class StudentMap(ClassMap):
    entity = Student

    def __init__(self, audited: bool = False):
        super().__init__()
        self.id("id").map("name")
        self.has_many_to_many("courses", Course)
        if audited:
            self.read_only()


class CourseMap(ClassMap):
    entity = Course

    def __init__(self, audited: bool = False):
        super().__init__()
        self.id("id").map("title")
        self.has_many_to_many("students", Student)


def students_own(side_a, side_b):
    """Students always own the enrolment table."""
    return side_a if side_a.owner.entity is Student else side_b


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    container = FluentMappingsContainer()
    (
        container.add(StudentMap)
        .add(CourseMap)
        .override_bidirectional_many_to_many_pairing(students_own)
        .conventions.add(
            TableName(lambda entity: entity.__name__.lower() + "s"),
            ForeignKey(lambda entity: entity.__name__.lower() + "_fk"),
            ManyToManyTable(lambda owner, child: f"{owner.__name__}_{child.__name__}".lower()),
        )
    )
    # construct_by does not chain
    container.construct_by(lambda mapping_type: mapping_type(audited=True))

    cfg = Configuration()
    container.apply(cfg)

    for statement in cfg.generate_schema_script():
        print(statement + ";")


if __name__ == "__main__":
    main()
