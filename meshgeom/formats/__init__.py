"""Reading and writing polygon meshes in OBJ, OFF and STL formats."""