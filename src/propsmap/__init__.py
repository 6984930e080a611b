# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 20:01:52
# @Author : Kariko Lin

import logging

from .expand import delete_unexpanded_props, expand_props, is_property_missing
from .formats import PropertiesJsonHandler, PropertiesYamlHandler
from .model import PropertiesMap, merge_maps_of_properties
from .parser import (
    InvalidPropertiesLine,
    PropertiesParser,
    current_os_suffix,
    load,
    load_from_bytes,
    load_from_lines,
    safe_load
)
from .strings import InvalidQuoting, split_quoted_string

__all__ = [
    'PropertiesMap', 'merge_maps_of_properties',
    'expand_props', 'is_property_missing', 'delete_unexpanded_props',
    'split_quoted_string', 'InvalidQuoting',
    'PropertiesParser', 'InvalidPropertiesLine', 'current_os_suffix',
    'load', 'load_from_bytes', 'load_from_lines', 'safe_load',
    'PropertiesJsonHandler', 'PropertiesYamlHandler'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
