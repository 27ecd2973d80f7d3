"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- 狀態機：集中管理 Room 的狀態轉換
- Registry：記憶體中的房間儲存與 connection 反向索引
- Manager：建立、加入、落子、斷線清理
- Locks：每個房間一把鎖的並發控制
"""
