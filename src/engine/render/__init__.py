"""
どこで: `engine.render` サブパッケージ。
何を: カメラ/姿勢行列と、FrameData → GPU 転送・描画の入口（SpikeRenderer/SpikeMeshBuffer/Shader）を提供。
なぜ: 計算（core/effects）と描画の責務を分離し、GPU リソース管理を局所化するため。
"""
