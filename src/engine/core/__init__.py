"""
どこで: `engine.core` サブパッケージ。
何を: モーフ状態機械・回転・投影・フレームバッファ・ループドライバ・フレーム駆動を提供。
なぜ: 計算の中核を表示（pyglet/ModernGL）から切り離し、上位層から再利用可能にするため。
"""
