from .yaml_parser import YamlParser, yaml_parser

__all__ = ["YamlParser", "yaml_parser"]
