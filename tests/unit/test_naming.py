"""
Unit Tests for Artifact Naming and Imports
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemagen import (
    FieldModel,
    GlobalConfig,
    IdType,
    NameResolver,
    NamingStrategy,
    StrategyConfig,
    TableModel,
    required_imports,
)
from schemagen.naming import ACTIVE_RECORD_MODEL, ID_TYPE, TABLE_ID, VERSION


def resolve(table_name, strategy=None, global_config=None):
    resolver = NameResolver(strategy or StrategyConfig(), global_config or GlobalConfig())
    return resolver.resolve(TableModel(name=table_name))


class TestDefaultNames:
    """Tests for names derived without format overrides"""

    def test_artifact_names(self):
        """Every artifact name is derived from the entity name"""
        table = resolve("sys_user")

        assert table.entity_name == "SysUser"
        assert table.mapper_name == "SysUserMapper"
        assert table.xml_name == "SysUserMapper"
        assert table.service_name == "ISysUserService"
        assert table.service_impl_name == "SysUserServiceImpl"
        assert table.controller_name == "SysUserController"

    def test_conventional_name_needs_no_annotation(self):
        """Entity names that map back to the table are not marked convert"""
        assert resolve("sys_user").convert is False
        assert resolve("user").convert is False

    def test_table_prefix(self):
        """Prefixes are stripped and the entity is marked convert"""
        table = resolve("t_sys_user", strategy=StrategyConfig(table_prefix=["T_"]))

        assert table.entity_name == "SysUser"
        assert table.convert is True

    def test_no_change_naming(self):
        """Without camel-casing only the first letter is raised"""
        table = resolve("sys_user", strategy=StrategyConfig(naming=NamingStrategy.NO_CHANGE))

        assert table.entity_name == "Sys_user"
        assert table.convert is False

    def test_custom_name_converter(self):
        """A configured converter replaces the default naming"""

        class UpperConverter:
            def entity_name_convert(self, table):
                return table.name.upper()

            def property_name_convert(self, field):
                return field.name

        table = resolve("user", strategy=StrategyConfig(name_convert=UpperConverter()))
        assert table.entity_name == "USER"
        assert table.mapper_name == "USERMapper"


class TestFormattedNames:
    """Tests for global name formats"""

    def test_entity_format(self):
        """An entity format marks the table convert"""
        table = resolve("sys_user", global_config=GlobalConfig(entity_name="%sEntity"))

        assert table.entity_name == "SysUserEntity"
        assert table.convert is True
        assert table.mapper_name == "SysUserMapper"

    def test_artifact_formats(self):
        """Formats substitute the unformatted entity name"""
        table = resolve("sys_user", global_config=GlobalConfig(
            mapper_name="%sDao",
            xml_name="%sDao",
            service_name="%sService",
            service_impl_name="%sServiceImp",
            controller_name="%sApi",
        ))

        assert table.mapper_name == "SysUserDao"
        assert table.xml_name == "SysUserDao"
        assert table.service_name == "SysUserService"
        assert table.service_impl_name == "SysUserServiceImp"
        assert table.controller_name == "SysUserApi"

    def test_format_without_placeholder(self):
        """A format without %s is used verbatim"""
        table = resolve("sys_user", global_config=GlobalConfig(controller_name="SharedController"))
        assert table.controller_name == "SharedController"

    def test_format_with_other_percent_signs(self):
        """Only %s is substituted, other percent signs are kept"""
        table = resolve("sys_user", global_config=GlobalConfig(
            entity_name="%sEntity%",
            service_name="%d%sService",
        ))

        assert table.entity_name == "SysUserEntity%"
        assert table.service_name == "%dSysUserService"

    def test_blank_format_falls_back(self):
        """Blank formats behave like unset ones"""
        table = resolve("sys_user", global_config=GlobalConfig(service_name="  ", entity_name=""))

        assert table.service_name == "ISysUserService"
        assert table.entity_name == "SysUser"
        assert table.convert is False


class TestRequiredImports:
    """Tests for the imports an entity needs"""

    def make_table(self, has_primary_key=False, properties=()):
        fields = [FieldModel(name=p, property_name=p) for p in properties]
        return TableModel(name="sys_user", has_primary_key=has_primary_key, fields=fields)

    def test_nothing_configured(self):
        """A plain table needs no imports"""
        imports = required_imports(self.make_table(), StrategyConfig(), GlobalConfig())
        assert imports == frozenset()

    def test_active_record(self):
        """Active record entities extend Model"""
        imports = required_imports(self.make_table(), StrategyConfig(), GlobalConfig(active_record=True))
        assert imports == {ACTIVE_RECORD_MODEL}

    def test_super_class_replaces_active_record(self):
        """A super class is imported instead of Model"""
        imports = required_imports(
            self.make_table(),
            StrategyConfig(super_entity_class="com.example.BaseEntity"),
            GlobalConfig(active_record=True),
        )
        assert imports == {"com.example.BaseEntity"}

    def test_id_type_requires_key(self):
        """IdType and TableId are only needed with a primary key"""
        global_config = GlobalConfig(id_type=IdType.ASSIGN_ID)

        with_key = required_imports(self.make_table(has_primary_key=True), StrategyConfig(), global_config)
        without_key = required_imports(self.make_table(), StrategyConfig(), global_config)

        assert with_key == {ID_TYPE, TABLE_ID}
        assert without_key == frozenset()

    def test_version_field(self):
        """The optimistic lock field pulls in Version"""
        strategy = StrategyConfig(version_field_name="version")

        assert VERSION in required_imports(self.make_table(properties=["id", "version"]), strategy, GlobalConfig())
        assert VERSION not in required_imports(self.make_table(properties=["id"]), strategy, GlobalConfig())

    def test_result_is_frozen(self):
        """Imports are an immutable set, ordering is irrelevant"""
        imports = required_imports(self.make_table(), StrategyConfig(), GlobalConfig(active_record=True))
        assert isinstance(imports, frozenset)

    def test_resolver_sets_imports(self):
        """The resolver stores the imports on the table"""
        table = resolve("sys_user", global_config=GlobalConfig(active_record=True))
        assert table.required_imports == {ACTIVE_RECORD_MODEL}
