"""SceneVault - scene persistence and sharing backend for 3D model editing"""
