"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- NamingService：房間代碼生成
- WinService：勝負 / 平手判定
"""
