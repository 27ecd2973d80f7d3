"""
傳輸層

這個 package 負責把外部請求接到 core：
- websocket：遊戲事件的 WebSocket endpoint
- events：事件分派與廣播
- connections：連線與房間廣播群組
- rooms：唯讀的房間查詢 HTTP API
"""
