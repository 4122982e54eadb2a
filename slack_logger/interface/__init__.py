"""
接口层模块。

提供自定义 action 适配器、HTTP 接口和命令行入口。
"""
