# -*- coding: utf-8 -*-
# Generated by the protocol buffer compiler.  DO NOT EDIT!
# source: box_image_service/rpc/box_image_inference.proto
# Protobuf Python Version: 4.25.1
"""Generated protocol buffer code."""
from google.protobuf import descriptor as _descriptor
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import symbol_database as _symbol_database
from google.protobuf.internal import builder as _builder
# @@protoc_insertion_point(imports)

_sym_db = _symbol_database.Default()




DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(b'\n\x2f\x62ox_image_service/rpc/box_image_inference.proto\x12\x12tensorflow.serving\x22\x25\n\x0f\x42oxImageRequest\x12\x12\n\nimage_data\x18\x01 \x03(\x02\x22\x21\n\x10\x42oxImageResponse\x12\r\n\x05value\x18\x01 \x03(\x02\x32\x68\n\x0f\x42oxImageService\x12\x55\n\x08\x43lassify\x12\x23.tensorflow.serving.BoxImageRequest\x1a\x24.tensorflow.serving.BoxImageResponse\x62\x06proto3')

_globals = globals()
_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _globals)
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, 'box_image_service.rpc.box_image_inference_pb2', _globals)
if _descriptor._USE_C_DESCRIPTORS == False:
  DESCRIPTOR._options = None
  _globals['_BOXIMAGEREQUEST']._serialized_start=71
  _globals['_BOXIMAGEREQUEST']._serialized_end=108
  _globals['_BOXIMAGERESPONSE']._serialized_start=110
  _globals['_BOXIMAGERESPONSE']._serialized_end=143
  _globals['_BOXIMAGESERVICE']._serialized_start=145
  _globals['_BOXIMAGESERVICE']._serialized_end=249
# @@protoc_insertion_point(module_scope)
