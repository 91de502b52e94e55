# -*- coding: utf-8 -*-
"""
app_deploy：把文件"部署"到外部应用（用配置的程序打开文件），供部署编排器按目标类型调用。

用法:
    from app_deploy import AppPlugin, DeployContext, DeployTargetApp, DeployFileOptions
    plugin = AppPlugin(DeployContext(workspace_root="/path/to/workspace"))
    plugin.deploy_file("/tmp/a.txt", DeployTargetApp(app="viewer", arguments=["${file}"]),
                       DeployFileOptions(on_completed=lambda sender, e: print(e.error)))

启动器 (app_deploy.launcher) 在 Windows 下会导入 Qt，因此不在这里直接导入。
"""

from app_deploy.config import (
    CONFIG_FILENAME,
    get_config_path,
    get_workspace_root,
    load_config,
    load_targets,
    save_config,
)
from app_deploy.contracts import (
    DEFAULT_SEPARATOR,
    FILE_PLACEHOLDER,
    DeployFileCompletedEventArguments,
    DeployFileEventArguments,
    DeployFileOptions,
    DeployPlugin,
    DeployTarget,
    DeployTargetApp,
    DeployWorkspaceCompletedEventArguments,
    DeployWorkspaceOptions,
)
from app_deploy.objects import DeployContext, DeployPluginBase
from app_deploy.plugins import available_plugin_types, create_plugin
from app_deploy.plugins.app import AppPlugin, create_app_args_list

__all__ = [
    "CONFIG_FILENAME",
    "get_config_path",
    "get_workspace_root",
    "load_config",
    "load_targets",
    "save_config",
    "DEFAULT_SEPARATOR",
    "FILE_PLACEHOLDER",
    "DeployFileCompletedEventArguments",
    "DeployFileEventArguments",
    "DeployFileOptions",
    "DeployPlugin",
    "DeployTarget",
    "DeployTargetApp",
    "DeployWorkspaceCompletedEventArguments",
    "DeployWorkspaceOptions",
    "DeployContext",
    "DeployPluginBase",
    "available_plugin_types",
    "create_plugin",
    "AppPlugin",
    "create_app_args_list",
]
