"""核心层：缓存、远程源、包 / 前缀注册表"""
