# kubeShell/watch/__init__.py
from .watcher import SelfChangeFlag, RestartSignal, WatcherState, KubeconfigEventHandler, ConfigWatcher

__all__ = ['SelfChangeFlag', 'RestartSignal', 'WatcherState', 'KubeconfigEventHandler', 'ConfigWatcher']
