"""OpenGL drawing engine, drawable objects, asset loading and components."""