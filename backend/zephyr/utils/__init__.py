"""工具模組"""
